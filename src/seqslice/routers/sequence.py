from typing import Any

from fastapi import APIRouter, Depends, Path

from seqslice import deps
from seqslice.lib.logging import LoggedRoute
from seqslice.lib.logging.context import save_to_logging_context
from seqslice.lib.query import QueryService
from seqslice.lib.registry import SequenceIndexRegistry
from seqslice.lib.stores import BinnedKeyValueLocator
from seqslice.routers.shared import BASE_400_RESPONSE, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from seqslice.view_models.sequence import SequenceError, SequenceRegion, SequenceServiceInfo

TAG_NAME = "Sequence"

# Region queries keep their unprefixed path so existing clients continue to work.
router = APIRouter(
    tags=[TAG_NAME],
    route_class=LoggedRoute,
)

info_router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/sequence",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES},
    route_class=LoggedRoute,
)


@router.get(
    "/sequence/region/{system}/{location}",
    status_code=200,
    response_model=SequenceRegion,
    responses={
        400: {**BASE_400_RESPONSE[400], "model": SequenceError},
        404: {"description": "Unknown organism, region or empty range.", "model": SequenceError},
    },
    summary="Get the sequence of a genomic region",
)
async def get_region_sequence(
    system: str = Path(..., description="Organism (reference genome) identifier"),
    location: str = Path(
        ...,
        description="Location of the form <region>:<start>..<end>:<strand>. Start and end are 1-based and "
        "inclusive; a strand of -1 returns the reverse complement.",
        examples=["1:10001..10100:1"],
    ),
    service: QueryService = Depends(deps.get_query_service),
) -> Any:
    """
    Return the bases of a region of an organism's genome.
    """
    result = await service.handle(system, location)
    return result.as_dict()


@info_router.get(
    "/service-info",
    status_code=200,
    response_model=SequenceServiceInfo,
    summary="Show sequence service information",
)
def service_info(
    registry: SequenceIndexRegistry = Depends(deps.get_registry),
    service: QueryService = Depends(deps.get_query_service),
) -> Any:
    """
    Describe the sequence backend in use and the organisms it has loaded.
    """
    save_to_logging_context({"requested_resource": "service-info"})

    locator = registry.locator
    return SequenceServiceInfo(
        backend=registry.kind,
        max_query_length=service.max_length,
        bin_size=locator.bin_size if isinstance(locator, BinnedKeyValueLocator) else None,
        organisms=registry.organisms(),
    )
