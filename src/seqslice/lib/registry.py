"""
Process-wide mapping from organism identifiers to sequence stores.

Lifecycle: the registry starts empty and gains one store per organism the
first time that organism is requested. Stores are never evicted during
normal operation; :py:meth:`SequenceIndexRegistry.invalidate` and
:py:meth:`SequenceIndexRegistry.reset` exist for tests and for operators
who install new data under a running process.

Concurrent first requests for the same organism share one in-flight
discovery, so at most one store is ever constructed per organism.
"""

import asyncio
import logging
from typing import Optional

from seqslice.lib.exceptions import SystemNotFoundError
from seqslice.lib.stores.base import RandomAccessSequenceStore, SequenceStoreLocator

logger = logging.getLogger(__name__)


class SequenceIndexRegistry:
    def __init__(self, locator: SequenceStoreLocator):
        self.locator = locator
        self._stores: dict[str, RandomAccessSequenceStore] = {}
        self._pending: dict[str, asyncio.Future] = {}

    @property
    def kind(self) -> str:
        return self.locator.kind

    def organisms(self) -> list[str]:
        return sorted(self._stores)

    def get(self, organism: str) -> Optional[RandomAccessSequenceStore]:
        return self._stores.get(organism)

    async def resolve(self, organism: str) -> RandomAccessSequenceStore:
        """
        Return the store for *organism*, discovering it on first use.

        Raises :py:class:`SystemNotFoundError` when the organism has no data. Failed
        discoveries are not cached, so a retry after the data is installed succeeds.
        """
        store = self._stores.get(organism)
        if store is not None:
            return store

        pending = self._pending.get(organism)
        if pending is None:
            pending = asyncio.ensure_future(self._discover(organism))
            self._pending[organism] = pending
            pending.add_done_callback(lambda _: self._pending.pop(organism, None))

        # A cancelled caller must not cancel the shared discovery.
        return await asyncio.shield(pending)

    async def _discover(self, organism: str) -> RandomAccessSequenceStore:
        logger.debug(msg=f"Discovering sequence index for {organism}.", extra={"organism": organism})

        store = await self.locator.locate(organism)
        if store is None:
            logger.warning(msg=f"No sequence index found for {organism}.", extra={"organism": organism})
            raise SystemNotFoundError(f"failed to get sequence index for {organism}")

        self._stores[organism] = store
        logger.info(
            msg=f"Registered {store.kind} sequence store for {organism}.",
            extra={"organism": organism, "backend": store.kind},
        )
        return store

    async def invalidate(self, organism: str) -> bool:
        store = self._stores.pop(organism, None)
        if store is None:
            return False

        await store.close()
        return True

    async def reset(self) -> None:
        stores, self._stores = self._stores, {}
        for store in stores.values():
            await store.close()
