from typing import Optional

from fastapi import Depends
from redis.asyncio import Redis

from seqslice.lib.query import QueryService
from seqslice.lib.registry import SequenceIndexRegistry
from seqslice.lib.stores import BinnedKeyValueLocator, FastaIndexLocator, SequenceStoreLocator
from seqslice.settings.constants import (
    BINNED_BACKEND,
    INDEXED_BACKEND,
    MAX_QUERY_LENGTH,
    REDIS_DB,
    REDIS_IP,
    REDIS_PORT,
    REDIS_SSL,
    SEQUENCE_BACKEND,
    SEQUENCE_BASE_DIR,
    SEQUENCE_BIN_SIZE,
)

_registry: Optional[SequenceIndexRegistry] = None


def redis_client() -> Redis:
    return Redis(host=REDIS_IP, port=REDIS_PORT, ssl=REDIS_SSL, db=REDIS_DB)


def build_locator(backend: str = SEQUENCE_BACKEND, base_dir: str = SEQUENCE_BASE_DIR) -> SequenceStoreLocator:
    if backend == INDEXED_BACKEND:
        return FastaIndexLocator(base_dir)
    if backend == BINNED_BACKEND:
        return BinnedKeyValueLocator(redis_client(), SEQUENCE_BIN_SIZE)

    raise ValueError(f"Unknown sequence backend '{backend}'. Expected '{INDEXED_BACKEND}' or '{BINNED_BACKEND}'.")


def get_registry() -> SequenceIndexRegistry:
    global _registry

    if _registry is None:
        _registry = SequenceIndexRegistry(build_locator())

    return _registry


def get_query_service(registry: SequenceIndexRegistry = Depends(get_registry)) -> QueryService:
    return QueryService(registry, MAX_QUERY_LENGTH)
