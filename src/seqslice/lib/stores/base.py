"""Common interface of the random-access sequence stores.

A store answers ``fetch(region, start, end)`` with the bases of ``region`` in
the 0-based half-open range ``[start, end)``. The query service only talks to
this interface, so either backend can be selected when the registry is built.
"""

from abc import ABC, abstractmethod
from typing import Optional


class RandomAccessSequenceStore(ABC):
    """Base class for sequence stores owned by the sequence index registry.

    Attributes:
        organism: Identifier of the reference genome this store serves.
    """

    kind = "abstract"

    def __init__(self, organism: str):
        self.organism = organism

    @abstractmethod
    async def fetch(self, region: str, start: int, end: int) -> str:
        """Fetch the bases of ``region`` covering ``[start, end)``.

        Args:
            region: Chromosome or contig name.
            start: 0-based inclusive start coordinate.
            end: 0-based exclusive end coordinate.

        Returns:
            str: The bases of the range, clipped to the length of the region.

        Raises:
            FetchFailedError: The region does not exist or the data could not be read.
        """

    async def close(self) -> None:
        """Release any handles or connections held by the store."""
        return None


class SequenceStoreLocator(ABC):
    """Discovers and constructs the store for an organism."""

    kind = "abstract"

    @abstractmethod
    async def locate(self, organism: str) -> Optional[RandomAccessSequenceStore]:
        """Build the store for ``organism``, or return ``None`` when it has no data."""
