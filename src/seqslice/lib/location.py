"""
Parsing and validation of location expressions.

A location expression has the form ``<region>:<start>..<end>:<strand>``, for
example ``chr1:100..200:1``. Start and end are 1-based and inclusive on the
wire; :py:func:`validate_range` converts them to the 0-based half-open
coordinates used by every sequence store.
"""

import re

from seqslice.lib.exceptions import InvertedRangeError, MalformedLocationError, RangeTooLargeError
from seqslice.lib.types.sequence import GenomicLocation, RawLocation, Strand
from seqslice.settings.constants import MAX_QUERY_LENGTH

LOCATION_REGEX = re.compile(r"(?P<region>.+):(?P<start>\d+)\.\.(?P<end>\d+):(?P<strand>[+-]?1|[+-])")

REVERSE_STRAND_TOKENS = frozenset(["-1", "-"])


def parse_location(location: str) -> RawLocation:
    """
    Split a location expression into its region, start, end and strand.

    >>> parse_location("chr1:100..200:-1")
    RawLocation(region='chr1', start=100, end=200, strand=<Strand.reverse: 'reverse'>)

    Raises :py:class:`MalformedLocationError` unless the whole string matches.
    """
    match = LOCATION_REGEX.fullmatch(location)
    if not match:
        raise MalformedLocationError(
            f"Malformed location '{location}'. Expected a location of the form <region>:<start>..<end>:<strand>"
        )

    strand = Strand.reverse if match.group("strand") in REVERSE_STRAND_TOKENS else Strand.forward
    try:
        start, end = int(match.group("start")), int(match.group("end"))
    except ValueError as e:
        # Coordinates past the interpreter's integer conversion limit.
        raise MalformedLocationError(f"Malformed location. Start or end coordinate is too large: {e}") from e

    return RawLocation(match.group("region"), start, end, strand)


def validate_range(raw: RawLocation, max_length: int = MAX_QUERY_LENGTH) -> GenomicLocation:
    """
    Normalize a 1-based inclusive location to a 0-based half-open one and check it.

    A start of zero would normalize to -1; it is clamped to 0 rather than rejected.
    """
    start = max(raw.start - 1, 0)
    end = raw.end

    if start > end:
        raise InvertedRangeError(
            f"Cannot request a slice whose start is greater than its end. Start: {start}. End: {end}"
        )

    length = end - start
    if length > max_length:
        raise RangeTooLargeError(
            f"{length} is greater than the maximum allowed length of {max_length}. Request smaller regions of sequence"
        )

    return GenomicLocation(raw.region, start, end, raw.strand)
