import logging


def canonical_only(record: logging.LogRecord) -> bool:
    """Pass only canonical request and command lines."""
    return bool(getattr(record, "canonical", False))
