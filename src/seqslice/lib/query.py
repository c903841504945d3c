import logging

from seqslice.lib.exceptions import SequenceEmptyError
from seqslice.lib.location import parse_location, validate_range
from seqslice.lib.logging.context import save_to_logging_context
from seqslice.lib.registry import SequenceIndexRegistry
from seqslice.lib.sequence import reverse_complement
from seqslice.lib.types.sequence import SequenceResult, Strand
from seqslice.settings.constants import MAX_QUERY_LENGTH

logger = logging.getLogger(__name__)


class QueryService:
    """
    Answers ``(organism, location)`` queries with the requested bases.

    The service holds no state of its own; stores come from the registry on every call.
    Failures surface as :py:class:`~seqslice.lib.exceptions.SequenceQueryError` subclasses.
    """

    def __init__(self, registry: SequenceIndexRegistry, max_length: int = MAX_QUERY_LENGTH):
        self.registry = registry
        self.max_length = max_length

    async def handle(self, organism: str, location: str) -> SequenceResult:
        save_to_logging_context({"requested_organism": organism, "requested_location": location})

        genomic_location = validate_range(parse_location(location), self.max_length)
        save_to_logging_context(
            {
                "requested_region": genomic_location.region,
                "requested_start": genomic_location.start,
                "requested_end": genomic_location.end,
                "requested_strand": genomic_location.strand.value,
            }
        )

        store = await self.registry.resolve(organism)
        save_to_logging_context({"sequence_backend": store.kind})

        seq = await store.fetch(genomic_location.region, genomic_location.start, genomic_location.end)
        if not seq:
            raise SequenceEmptyError(f"failed to get subsequence {location}")

        if genomic_location.strand is Strand.reverse:
            seq = reverse_complement(seq)

        save_to_logging_context({"sequence_length": len(seq)})
        return SequenceResult(query=location, id=location, seq=seq)
