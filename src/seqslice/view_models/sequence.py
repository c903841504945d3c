from typing import Literal, Optional

from pydantic import Field

from seqslice.view_models.base.base import BaseModel


class SequenceRegion(BaseModel):
    molecule: Literal["dna"] = Field("dna", description="Molecule type of the returned sequence")
    query: str = Field(..., description="The location expression exactly as requested")
    id: str = Field(..., description="Identifier of the result, equal to the requested location expression")
    seq: str = Field(..., description="Bases of the requested range, reverse complemented for the reverse strand")


class SequenceError(BaseModel):
    error: str = Field(..., description="Human-readable description of the failure")


class SequenceServiceInfo(BaseModel):
    backend: str = Field(..., description="Kind of sequence store serving requests ('indexed' or 'binned')")
    max_query_length: int = Field(..., description="Largest number of bases a single request may return")
    bin_size: Optional[int] = Field(None, description="Bin size of the binned backend, if in use")
    organisms: list[str] = Field(..., description="Organisms whose sequence index is currently loaded")
