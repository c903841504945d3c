from enum import Enum


class LogType(str, Enum):
    api_request = "api_request"
    cli_command = "cli_command"


class Source(str, Enum):
    cli = "cli"
    docs = "docs"
    other = "other"

