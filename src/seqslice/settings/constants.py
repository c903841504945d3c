"""Environment configuration constants.

Every environment variable read by the service is defined here, with its
default and type conversion.
"""

import os

SEQUENCE_BACKEND = (os.getenv("SEQUENCE_BACKEND") or "indexed").lower()
SEQUENCE_BASE_DIR = os.getenv("SEQUENCE_BASE_DIR") or "/data/fasta"
SEQUENCE_SUBDIRECTORY = os.getenv("SEQUENCE_SUBDIRECTORY") or "dna"
SEQUENCE_FILE_SUFFIX = os.getenv("SEQUENCE_FILE_SUFFIX") or ".dna.toplevel.fa.gz"
SEQUENCE_BIN_SIZE = int(os.getenv("SEQUENCE_BIN_SIZE") or 100_000_000)

MAX_QUERY_LENGTH = int(os.getenv("MAX_QUERY_LENGTH") or 100_000_000)

REDIS_IP = os.getenv("REDIS_IP") or "localhost"
REDIS_PORT = int(os.getenv("REDIS_PORT") or 6379)
REDIS_SSL = (os.getenv("REDIS_SSL") or "false").lower() == "true"
REDIS_DB = int(os.getenv("REDIS_DB") or 10)

HOST = os.getenv("HOST") or "0.0.0.0"
PORT = int(os.getenv("PORT") or 8888)

INDEXED_BACKEND = "indexed"
BINNED_BACKEND = "binned"
SEQUENCE_BACKENDS = (INDEXED_BACKEND, BINNED_BACKEND)
