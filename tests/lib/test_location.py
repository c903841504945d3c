import pytest

from seqslice.lib.exceptions import InvertedRangeError, MalformedLocationError, RangeTooLargeError
from seqslice.lib.location import parse_location, validate_range
from seqslice.lib.types.sequence import GenomicLocation, RawLocation, Strand


@pytest.mark.parametrize(
    "location,expected",
    [
        ("chr1:100..200:1", RawLocation("chr1", 100, 200, Strand.forward)),
        ("chr1:100..200:-1", RawLocation("chr1", 100, 200, Strand.reverse)),
        ("chr1:100..200:+1", RawLocation("chr1", 100, 200, Strand.forward)),
        ("chr1:100..200:+", RawLocation("chr1", 100, 200, Strand.forward)),
        ("chr1:100..200:-", RawLocation("chr1", 100, 200, Strand.reverse)),
        ("1:0..10:1", RawLocation("1", 0, 10, Strand.forward)),
        # Region names may themselves contain colons.
        ("HLA-A*01:01:1..5:1", RawLocation("HLA-A*01:01", 1, 5, Strand.forward)),
    ],
)
def test_parse_location(location, expected):
    assert parse_location(location) == expected


@pytest.mark.parametrize(
    "location",
    [
        "",
        "chr1",
        "chr1:100..200",
        "chr1:100-200:1",
        "chr1:100..200:1x",
        "chr1:100..200:2",
        "chr1:-5..200:1",
        "chr1:abc..200:1",
        ":100..200:1",
        "chr1:100..200:1\n",
    ],
)
def test_parse_location_rejects_malformed_expressions(location):
    with pytest.raises(MalformedLocationError) as exc_info:
        parse_location(location)

    assert exc_info.value.code == "malformed-location"


def test_validate_range_converts_to_zero_based_half_open():
    location = validate_range(parse_location("chr1:100..200:1"))

    assert location == GenomicLocation("chr1", 99, 200, Strand.forward)
    assert location.length == 101


def test_validate_range_clamps_zero_start():
    location = validate_range(RawLocation("chr1", 0, 10, Strand.forward))

    assert location.start == 0
    assert location.end == 10


def test_validate_range_allows_empty_range():
    location = validate_range(RawLocation("chr1", 11, 10, Strand.forward))

    assert location.start == location.end == 10


def test_validate_range_rejects_inverted_range():
    with pytest.raises(InvertedRangeError) as exc_info:
        validate_range(parse_location("chr1:200..100:1"))

    assert "start is greater than its end" in exc_info.value.message
    assert "Start: 199. End: 100" in exc_info.value.message


def test_validate_range_accepts_maximum_length():
    location = validate_range(RawLocation("chr1", 1, 50, Strand.forward), max_length=50)

    assert location.length == 50


def test_validate_range_rejects_range_one_over_maximum():
    with pytest.raises(RangeTooLargeError) as exc_info:
        validate_range(RawLocation("chr1", 1, 51, Strand.forward), max_length=50)

    assert exc_info.value.message.startswith("51 is greater than the maximum allowed length of 50")


def test_validate_range_uses_default_maximum():
    with pytest.raises(RangeTooLargeError):
        validate_range(RawLocation("chr1", 1, 100_000_001, Strand.forward))


def test_parse_location_rejects_oversized_coordinates():
    digits = "9" * 5000

    with pytest.raises(MalformedLocationError) as exc_info:
        parse_location(f"chr1:{digits}..{digits}:1")

    assert exc_info.value.code == "malformed-location"
