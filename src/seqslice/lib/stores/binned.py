"""
Sequence store over fixed-size bins held in Redis.

Every chromosome is split into bins of ``bin_size`` bases stored as plain
strings under ``<organism>:<region>:<bin_index>``. A range query is answered
by one ``GETRANGE`` per bin it touches, concatenated in ascending bin order.
"""

import logging
import re
from typing import NamedTuple, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from seqslice.lib.exceptions import FetchFailedError
from seqslice.lib.stores.base import RandomAccessSequenceStore, SequenceStoreLocator
from seqslice.settings.constants import BINNED_BACKEND, SEQUENCE_BIN_SIZE

logger = logging.getLogger(__name__)

GLOB_SPECIAL_CHARACTERS = re.compile(r"([*?\[\]\\])")


class BinRange(NamedTuple):
    """Inclusive offsets inside one bin, as expected by ``GETRANGE``."""

    bin_index: int
    start: int
    end: int


def bin_ranges(start: int, end: int, bin_size: int) -> list[BinRange]:
    """
    Split the half-open range ``[start, end)`` over bins of ``bin_size``.

    >>> bin_ranges(80, 120, 100)
    [BinRange(bin_index=0, start=80, end=99), BinRange(bin_index=1, start=0, end=19)]
    >>> bin_ranges(10, 10, 100)
    []
    """
    if end <= start:
        return []

    ranges = []
    for bin_index in range(start // bin_size, (end - 1) // bin_size + 1):
        offset = bin_index * bin_size
        ranges.append(BinRange(bin_index, max(start, offset) - offset, min(end, offset + bin_size) - offset - 1))

    return ranges


class BinnedKeyValueStore(RandomAccessSequenceStore):
    kind = BINNED_BACKEND

    def __init__(self, organism: str, redis: Redis, bin_size: int = SEQUENCE_BIN_SIZE):
        super().__init__(organism)
        if bin_size <= 0:
            raise ValueError(f"bin_size must be positive, got {bin_size}")

        self.redis = redis
        self.bin_size = bin_size

    def bin_key(self, region: str, bin_index: int) -> str:
        return f"{self.organism}:{region}:{bin_index}"

    async def fetch(self, region: str, start: int, end: int) -> str:
        chunks: list[str] = []

        for bin_range in bin_ranges(start, end, self.bin_size):
            key = self.bin_key(region, bin_range.bin_index)

            try:
                chunk = await self.redis.getrange(key, bin_range.start, bin_range.end)
                if not chunk and not chunks and not await self.redis.exists(self.bin_key(region, 0)):
                    raise FetchFailedError(f"Region '{region}' is not present in the sequence bins for {self.organism}")

            except RedisError as e:
                logger.error(
                    msg=f"Failed to fetch sequence bin {key}.",
                    extra={"organism": self.organism, "bin_key": key},
                    exc_info=e,
                )
                raise FetchFailedError(f"failed to fetch sequence bin {key}: {e}") from e

            # The region ends inside a previous bin.
            if not chunk:
                break

            chunks.append(chunk.decode("ascii") if isinstance(chunk, bytes) else chunk)

        return "".join(chunks)


class BinnedKeyValueLocator(SequenceStoreLocator):
    """Builds a :py:class:`BinnedKeyValueStore` for organisms with at least one bin in Redis."""

    kind = BINNED_BACKEND

    def __init__(self, redis: Redis, bin_size: int = SEQUENCE_BIN_SIZE):
        self.redis = redis
        self.bin_size = bin_size

    async def has_bins(self, organism: str) -> bool:
        pattern = GLOB_SPECIAL_CHARACTERS.sub(r"\\\1", organism) + ":*"
        async for _ in self.redis.scan_iter(match=pattern, count=1000):
            return True

        return False

    async def locate(self, organism: str) -> Optional[BinnedKeyValueStore]:
        if not organism:
            return None

        try:
            found = await self.has_bins(organism)
        except RedisError as e:
            logger.error(msg="Failed to scan sequence bins.", extra={"organism": organism}, exc_info=e)
            raise FetchFailedError(f"failed to look up sequence bins for {organism}: {e}") from e

        if not found:
            return None

        return BinnedKeyValueStore(organism, self.redis, self.bin_size)
