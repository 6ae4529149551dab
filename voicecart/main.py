import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from voicecart import __version__
from voicecart.api.routes import commands, health
from voicecart.config import settings
from voicecart.errors import EmptyInputError, ExtractionUnavailableError
from voicecart.logging import configure_logging
from voicecart.models.contracts import ErrorResponse

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "voicecart_started",
        version=__version__,
        environment=settings.environment,
        intent_backend=settings.intent_backend,
    )
    yield


app = FastAPI(
    title="VoiceCart API",
    version=__version__,
    docs_url="/docs",
    redoc_url=None,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag each request with an ID (client-supplied or generated).

    The ID is bound into structlog context vars, so translation, extraction
    and list events for one command share it. It is echoed in X-Request-ID.
    """
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def _error_response(
    request: Request,
    status: int,
    code: str,
    message: str,
    *,
    retryable: bool = False,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=code, message=message, retryable=retryable, detail=detail)
    response = JSONResponse(status_code=status, content=body.model_dump())
    response.headers["X-Request-ID"] = getattr(
        request.state, "request_id", request.headers.get("X-Request-ID", "")
    )
    return response


@app.exception_handler(EmptyInputError)
async def empty_input_handler(request: Request, exc: EmptyInputError) -> JSONResponse:
    return _error_response(request, 400, "validation_error", str(exc))


@app.exception_handler(ExtractionUnavailableError)
async def extraction_unavailable_handler(
    request: Request,
    exc: ExtractionUnavailableError,
) -> JSONResponse:
    """503 with the operator hint; the client may retry once the backend is back."""
    logger.error("extraction_unavailable", path=request.url.path, error=str(exc))
    return _error_response(
        request,
        503,
        "extraction_unavailable",
        "Language model not available",
        retryable=True,
        detail=f"{exc} | {exc.hint}",
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = " -> ".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}")
    return _error_response(request, 422, "validation_error", "; ".join(messages))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_response(
        request, 500, "internal_error", "An unexpected error occurred", retryable=True
    )


app.include_router(health.router)
app.include_router(commands.router, prefix="/api")
