import pytest

from seqslice.lib.sequence import reverse_complement


@pytest.mark.parametrize(
    "seq,expected",
    [
        ("", ""),
        ("A", "T"),
        ("ACGTACGTAC", "GTACGTACGT"),
        ("AAACCC", "GGGTTT"),
        ("GATTACA", "TGTAATC"),
    ],
)
def test_reverse_complement(seq, expected):
    assert reverse_complement(seq) == expected


@pytest.mark.parametrize("seq", ["ACGTNNNNacgt", "RYKMSWBDHV", "acgt", "N-.*ACGT"])
def test_reverse_complement_is_an_involution(seq):
    assert reverse_complement(reverse_complement(seq)) == seq


def test_reverse_complement_passes_other_characters_through_in_reversed_position():
    assert reverse_complement("AnCgT") == "AgGnT"
    assert reverse_complement("ANNC") == "GNNT"
