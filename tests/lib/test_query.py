import pytest

from seqslice.lib.exceptions import (
    FetchFailedError,
    InvertedRangeError,
    MalformedLocationError,
    RangeTooLargeError,
    SequenceEmptyError,
    SystemNotFoundError,
)
from seqslice.lib.query import QueryService
from seqslice.lib.sequence import reverse_complement
from seqslice.lib.types.sequence import SequenceResult

from tests.helpers.constants import TEST_CHR2_SEQUENCE, TEST_ORGANISM, TEST_UNKNOWN_ORGANISM


@pytest.fixture(params=["indexed", "binned"])
def service(request):
    """
    A query service over each backend. Both hold the same test sequences.
    """
    registry = request.getfixturevalue(f"{request.param}_registry")
    return QueryService(registry)


@pytest.mark.asyncio
async def test_reverse_strand_query(service):
    result = await service.handle(TEST_ORGANISM, "chr1:1..10:-1")

    assert result == SequenceResult(query="chr1:1..10:-1", id="chr1:1..10:-1", seq="GTACGTACGT")
    assert result.as_dict() == {
        "molecule": "dna",
        "query": "chr1:1..10:-1",
        "id": "chr1:1..10:-1",
        "seq": "GTACGTACGT",
    }


@pytest.mark.asyncio
async def test_forward_strand_query(service):
    result = await service.handle(TEST_ORGANISM, "chr2:81..120:1")

    assert result.seq == TEST_CHR2_SEQUENCE[80:120]
    assert result.molecule == "dna"


@pytest.mark.asyncio
async def test_reverse_strand_query_across_bins(service):
    result = await service.handle(TEST_ORGANISM, "chr2:51..230:-1")

    assert result.seq == reverse_complement(TEST_CHR2_SEQUENCE[50:230])


@pytest.mark.asyncio
async def test_zero_start_is_clamped(service):
    result = await service.handle(TEST_ORGANISM, "chr1:0..4:1")

    assert result.seq == "ACGT"


@pytest.mark.asyncio
async def test_query_clipped_to_region_length(service):
    result = await service.handle(TEST_ORGANISM, "chr1:7..500:1")

    assert result.seq == "GTAC"


@pytest.mark.parametrize(
    "organism,location,error",
    [
        (TEST_ORGANISM, "chr1:1..10", MalformedLocationError),
        (TEST_ORGANISM, "chr1:10..1:1", InvertedRangeError),
        (TEST_UNKNOWN_ORGANISM, "chr1:1..10:1", SystemNotFoundError),
        (TEST_ORGANISM, "chrUn:1..10:1", FetchFailedError),
        (TEST_ORGANISM, "chr1:11..10:1", SequenceEmptyError),
        (TEST_ORGANISM, "chr1:301..310:1", SequenceEmptyError),
    ],
)
@pytest.mark.asyncio
async def test_query_errors(service, organism, location, error):
    with pytest.raises(error):
        await service.handle(organism, location)


@pytest.mark.asyncio
async def test_range_too_large(indexed_registry):
    service = QueryService(indexed_registry, max_length=5)

    with pytest.raises(RangeTooLargeError):
        await service.handle(TEST_ORGANISM, "chr1:1..6:1")

    assert (await service.handle(TEST_ORGANISM, "chr1:1..5:1")).seq == "ACGTA"


@pytest.mark.asyncio
async def test_input_errors_are_raised_before_resolution(indexed_registry):
    service = QueryService(indexed_registry)

    with pytest.raises(MalformedLocationError):
        await service.handle(TEST_UNKNOWN_ORGANISM, "not a location")

    assert indexed_registry.organisms() == []


@pytest.mark.asyncio
async def test_empty_result_message(indexed_registry):
    service = QueryService(indexed_registry)

    with pytest.raises(SequenceEmptyError) as exc_info:
        await service.handle(TEST_ORGANISM, "chr1:11..10:1")

    assert exc_info.value.message == "failed to get subsequence chr1:11..10:1"
