from dataclasses import asdict, dataclass
from enum import Enum
from typing import Literal, NamedTuple


class Strand(str, Enum):
    forward = "forward"
    reverse = "reverse"


class RawLocation(NamedTuple):
    """A parsed location expression, still in 1-based inclusive wire numbering."""

    region: str
    start: int
    end: int
    strand: Strand


class GenomicLocation(NamedTuple):
    """A validated location in 0-based half-open coordinates."""

    region: str
    start: int
    end: int
    strand: Strand

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class SequenceResult:
    query: str
    id: str
    seq: str
    molecule: Literal["dna"] = "dna"

    def as_dict(self) -> dict[str, str]:
        return asdict(self)
