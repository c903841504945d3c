class SequenceQueryError(Exception):
    """
    Base class for every failure of a sequence region query.

    Each subclass carries a stable ``code`` which is reported alongside the
    human-readable message. A query that raises one of these never produces
    a partial sequence.
    """

    code = "sequence-query-error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedLocationError(SequenceQueryError, ValueError):
    code = "malformed-location"


class InvertedRangeError(SequenceQueryError, ValueError):
    code = "inverted-range"


class RangeTooLargeError(SequenceQueryError, ValueError):
    code = "range-too-large"


class SystemNotFoundError(SequenceQueryError, LookupError):
    code = "system-not-found"


class FetchFailedError(SequenceQueryError):
    code = "fetch-failed"


class SequenceEmptyError(SequenceQueryError):
    code = "sequence-empty"
