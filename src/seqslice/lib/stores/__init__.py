from seqslice.lib.stores.base import RandomAccessSequenceStore, SequenceStoreLocator
from seqslice.lib.stores.binned import BinnedKeyValueLocator, BinnedKeyValueStore
from seqslice.lib.stores.block_indexed import BlockIndexedStore, FastaIndexLocator

__all__ = [
    "BinnedKeyValueLocator",
    "BinnedKeyValueStore",
    "BlockIndexedStore",
    "FastaIndexLocator",
    "RandomAccessSequenceStore",
    "SequenceStoreLocator",
]
