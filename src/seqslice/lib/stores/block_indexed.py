"""
Random access into bgzip-compressed FASTA files.

Each organism directory holds one whole-genome ``*.dna.toplevel.fa.gz`` file
together with two sidecars produced by ``samtools faidx``: the ``.fai`` index
(sequence names, lengths and line layout) and the ``.gzi`` index (offsets of
the compressed BGZF blocks). With both, htslib seeks straight to the blocks
covering a range and decompresses only those.
"""

import asyncio
import functools
import logging
import os
import threading
from typing import Optional

import pysam

from seqslice.lib.exceptions import FetchFailedError, SystemNotFoundError
from seqslice.lib.stores.base import RandomAccessSequenceStore, SequenceStoreLocator
from seqslice.settings.constants import (
    INDEXED_BACKEND,
    SEQUENCE_BASE_DIR,
    SEQUENCE_FILE_SUFFIX,
    SEQUENCE_SUBDIRECTORY,
)

logger = logging.getLogger(__name__)

NAME_INDEX_SUFFIX = ".fai"
BLOCK_INDEX_SUFFIX = ".gzi"


class BlockIndexedStore(RandomAccessSequenceStore):
    """Sequence store backed by a BGZF FASTA file and its ``.fai`` / ``.gzi`` indexes.

    htslib file handles carry seek state, so every worker thread opens its own
    handle on first use. Handles are only read from once opened.
    """

    kind = INDEXED_BACKEND

    def __init__(
        self,
        organism: str,
        fasta_path: str,
        fai_path: Optional[str] = None,
        gzi_path: Optional[str] = None,
    ):
        super().__init__(organism)
        self.fasta_path = str(fasta_path)
        self.fai_path = str(fai_path) if fai_path else self.fasta_path + NAME_INDEX_SUFFIX
        self.gzi_path = str(gzi_path) if gzi_path else self.fasta_path + BLOCK_INDEX_SUFFIX

        self._local = threading.local()
        self._handles: list[pysam.FastaFile] = []
        self._handles_lock = threading.Lock()

        # Open one handle up front so unreadable files fail at construction time.
        self._handle()

    def _handle(self) -> pysam.FastaFile:
        handle = getattr(self._local, "handle", None)
        if handle is None:
            handle = pysam.FastaFile(
                self.fasta_path,
                filepath_index=self.fai_path,
                filepath_index_compressed=self.gzi_path,
            )
            self._local.handle = handle
            with self._handles_lock:
                self._handles.append(handle)

        return handle

    def references(self) -> list[str]:
        return list(self._handle().references)

    def length(self, region: str) -> int:
        try:
            return self._handle().get_reference_length(region)
        except (KeyError, ValueError) as e:
            raise FetchFailedError(f"Region '{region}' is not present in the sequence index for {self.organism}") from e

    def fetch_sync(self, region: str, start: int, end: int) -> str:
        try:
            return self._handle().fetch(reference=region, start=start, end=end)
        except KeyError as e:
            raise FetchFailedError(f"Region '{region}' is not present in the sequence index for {self.organism}") from e
        except (ValueError, OSError) as e:
            logger.error(
                msg=f"Failed to read {region}:{start}-{end} from {self.fasta_path}.",
                extra={"organism": self.organism, "fasta_path": self.fasta_path},
                exc_info=e,
            )
            raise FetchFailedError(f"failed to read {region}:{start}-{end} for {self.organism}: {e}") from e

    async def fetch(self, region: str, start: int, end: int) -> str:
        loop = asyncio.get_running_loop()
        blocking = functools.partial(self.fetch_sync, region, start, end)
        return await loop.run_in_executor(None, blocking)

    async def close(self) -> None:
        with self._handles_lock:
            handles, self._handles = self._handles, []

        for handle in handles:
            handle.close()

        self._local = threading.local()


class FastaIndexLocator(SequenceStoreLocator):
    """Finds ``<base_dir>/<organism>/<subdirectory>/*<suffix>`` and opens it as a :py:class:`BlockIndexedStore`."""

    kind = INDEXED_BACKEND

    def __init__(
        self,
        base_dir: str = SEQUENCE_BASE_DIR,
        subdirectory: str = SEQUENCE_SUBDIRECTORY,
        suffix: str = SEQUENCE_FILE_SUFFIX,
    ):
        self.base_dir = str(base_dir)
        self.subdirectory = subdirectory
        self.suffix = suffix

    def organism_directory(self, organism: str) -> Optional[str]:
        if organism in ("", ".", "..") or os.sep in organism:
            return None

        return os.path.join(self.base_dir, organism, self.subdirectory)

    def find_sequence_file(self, organism: str) -> Optional[str]:
        directory = self.organism_directory(organism)
        if directory is None:
            return None

        try:
            entries = sorted(os.listdir(directory))
        except OSError as e:
            logger.debug(msg=f"Could not list sequence directory {directory}: {e}", extra={"organism": organism})
            return None

        for entry in entries:
            if entry.endswith(self.suffix):
                return os.path.join(directory, entry)

        return None

    def build(self, organism: str) -> Optional[BlockIndexedStore]:
        fasta_path = self.find_sequence_file(organism)
        if fasta_path is None:
            return None

        missing = [
            path
            for path in (fasta_path + NAME_INDEX_SUFFIX, fasta_path + BLOCK_INDEX_SUFFIX)
            if not os.path.isfile(path)
        ]
        if missing:
            logger.warning(
                msg=f"Sequence file {fasta_path} is missing its index files: {', '.join(missing)}",
                extra={"organism": organism},
            )
            return None

        try:
            store = BlockIndexedStore(organism, fasta_path)
        except (OSError, ValueError) as e:
            raise SystemNotFoundError(f"failed to open sequence index for {organism}") from e

        logger.info(msg=f"Opened sequence index {fasta_path}.", extra={"organism": organism})
        return store

    async def locate(self, organism: str) -> Optional[BlockIndexedStore]:
        loop = asyncio.get_running_loop()
        blocking = functools.partial(self.build, organism)
        return await loop.run_in_executor(None, blocking)
