import logging
import time
from contextlib import asynccontextmanager

import click
import uvicorn
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.openapi.utils import get_openapi
from starlette import status
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette_context.plugins import (
    CorrelationIdPlugin,
    RequestIdPlugin,
    UserAgentPlugin,
)

from seqslice import __version__, deps
from seqslice.lib.exceptions import (
    FetchFailedError,
    InvertedRangeError,
    MalformedLocationError,
    RangeTooLargeError,
    SequenceEmptyError,
    SequenceQueryError,
    SystemNotFoundError,
)
from seqslice.lib.logging.canonical import log_request
from seqslice.lib.logging.context import (
    PopulatedRawContextMiddleware,
    format_raised_exception_info_as_dict,
    logging_context,
    save_to_logging_context,
)
from seqslice.lib.slack import send_slack_message
from seqslice.routers import api_information, sequence
from seqslice.settings.constants import HOST, PORT

logger = logging.getLogger(__name__)

QUERY_ERROR_STATUS_CODES: dict[str, int] = {
    MalformedLocationError.code: status.HTTP_400_BAD_REQUEST,
    InvertedRangeError.code: status.HTTP_400_BAD_REQUEST,
    RangeTooLargeError.code: status.HTTP_400_BAD_REQUEST,
    SystemNotFoundError.code: status.HTTP_404_NOT_FOUND,
    FetchFailedError.code: status.HTTP_404_NOT_FOUND,
    SequenceEmptyError.code: status.HTTP_404_NOT_FOUND,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    get_registry = app.dependency_overrides.get(deps.get_registry, deps.get_registry)
    await get_registry().reset()


app = FastAPI(lifespan=lifespan)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    PopulatedRawContextMiddleware,
    plugins=(
        CorrelationIdPlugin(force_new_uuid=True),
        RequestIdPlugin(force_new_uuid=True),
        UserAgentPlugin(),
    ),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_information.router)
app.include_router(sequence.info_router)
app.include_router(sequence.router)


@app.exception_handler(SequenceQueryError)
async def sequence_query_exception_handler(request: Request, exc: SequenceQueryError):
    response = JSONResponse(
        status_code=QUERY_ERROR_STATUS_CODES.get(exc.code, status.HTTP_400_BAD_REQUEST),
        content={"error": exc.message},
    )
    save_to_logging_context({"query_error_code": exc.code, **format_raised_exception_info_as_dict(exc)})
    log_request(request, response, time.time_ns())
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    response = JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": exc.errors()}),
    )
    save_to_logging_context(format_raised_exception_info_as_dict(exc))
    log_request(request, response, time.time_ns())
    return response


@app.exception_handler(Exception)
async def exception_handler(request, err):
    save_to_logging_context(format_raised_exception_info_as_dict(err))
    response = JSONResponse(status_code=500, content={"message": "Internal server error"})

    try:
        logger.error(msg="Uncaught exception.", extra=logging_context(), exc_info=err)
        send_slack_message(err=err, request=request)
    finally:
        log_request(request, response, time.time_ns())

    return response


def customize_openapi_schema():
    title = "Sequence Region API"
    version = __version__
    openapi_schema = get_openapi(title=title, version=version, routes=app.routes)
    openapi_schema["info"] = {
        "title": title,
        "version": version,
        "description": """Random access to reference genome sequence. Request a region of an organism's genome
by location and receive its bases, reverse complemented for the reverse strand.""",
    }
    app.openapi_schema = openapi_schema
    return app.openapi_schema


customize_openapi_schema()


@click.command()
@click.option("--host", default=HOST, show_default=True, help="Interface to bind")
@click.option("--port", default=PORT, show_default=True, type=int, help="Port to listen on")
def main(host: str, port: int):
    """
    Serve the sequence region API with uvicorn.
    """
    uvicorn.run(app, host=host, port=port)


# If the application is not already being run within a uvicorn server, start uvicorn here.
if __name__ == "__main__":
    main()
