import os

import pysam

from tests.helpers.constants import TEST_FASTA_FILE_NAME, TEST_FASTA_LINE_WIDTH


def write_fasta(path, sequences: dict[str, str], line_width: int = TEST_FASTA_LINE_WIDTH) -> None:
    with open(path, "w") as f:
        for name, seq in sequences.items():
            f.write(f">{name} test sequence\n")
            for i in range(0, len(seq), line_width):
                f.write(seq[i : i + line_width] + "\n")


def write_indexed_fasta(directory, sequences: dict[str, str], file_name: str = TEST_FASTA_FILE_NAME) -> str:
    """
    Write *sequences* as a bgzip-compressed FASTA with ``.fai`` and ``.gzi`` indexes, returning its path.
    """
    os.makedirs(directory, exist_ok=True)

    plain_path = os.path.join(directory, file_name[: -len(".gz")])
    compressed_path = os.path.join(directory, file_name)

    write_fasta(plain_path, sequences)
    pysam.tabix_compress(plain_path, compressed_path, force=True)
    os.remove(plain_path)
    pysam.faidx(compressed_path)

    return compressed_path


def write_bins(redis, organism: str, sequences: dict[str, str], bin_size: int) -> None:
    """
    Store *sequences* in a synchronous Redis client as ``organism:region:bin`` strings.
    """
    for region, seq in sequences.items():
        for bin_index, offset in enumerate(range(0, len(seq), bin_size)):
            redis.set(f"{organism}:{region}:{bin_index}", seq[offset : offset + bin_size])


class RecordingRedis:
    """
    Wraps an asynchronous Redis client and records every ``GETRANGE`` issued through it.
    """

    def __init__(self, redis):
        self.redis = redis
        self.getrange_calls: list[tuple[str, int, int]] = []

    async def getrange(self, key, start, end):
        self.getrange_calls.append((key, start, end))
        return await self.redis.getrange(key, start, end)

    async def exists(self, *keys):
        return await self.redis.exists(*keys)

    def scan_iter(self, *args, **kwargs):
        return self.redis.scan_iter(*args, **kwargs)
