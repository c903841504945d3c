_COMPLEMENT = str.maketrans("ATCG", "TAGC")


def reverse_complement(seq: str) -> str:
    """
    Return *seq* read 3' to 5' with each base replaced by its Watson-Crick complement.

    Characters other than upper case A, C, G and T are kept as they are.

    >>> reverse_complement("ACGTN")
    'NACGT'
    """
    return seq.translate(_COMPLEMENT)[::-1]
