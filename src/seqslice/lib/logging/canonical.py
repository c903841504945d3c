import logging
from typing import Any, Optional

from starlette.requests import Request
from starlette.responses import Response

from seqslice import __version__
from seqslice.lib.logging.context import logging_context, save_to_logging_context
from seqslice.lib.logging.models import LogType, Source

logger = logging.getLogger(__name__)


def log_request(request: Request, response: Response, end: int) -> None:
    save_to_logging_context({"log_type": LogType.api_request, "response_code": response.status_code})

    start: Optional[int] = logging_context().get("time_ns")
    if start:
        save_to_logging_context({"duration_ns": end - start})

    save_to_logging_context({"canonical": True})
    if response.status_code < 400:
        logger.info(msg="Request completed.", extra=logging_context())
    elif response.status_code < 500:
        logger.warning(msg="Request completed.", extra=logging_context())
    else:
        logger.error(msg="Request completed.", extra=logging_context())


# Starlette context only exists inside a request, so commands carry their own context dictionary.
def log_command(command: str, log_context: dict[str, Any], success: bool, start: int, end: int) -> None:
    log_context = {
        **log_context,
        **{
            "command": command,
            "duration_ns": end - start,
            "version": __version__,
            "log_type": LogType.cli_command,
            "source": Source.cli,
            "canonical": True,
        },
    }

    if success:
        logger.info(msg="Command completed.", extra=log_context)
    else:
        logger.error(msg="Command completed with error.", extra=log_context)
