"""Shopping command endpoints.

POST /api/process is the voice/text entry point; the remaining routes
expose the list, direct catalog search, and suggestion tables.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from voicecart.api.deps import get_pipeline
from voicecart.data.tables import SUPPORTED_LANGUAGES
from voicecart.models.contracts import (
    CatalogSearchResponse,
    CommandResponse,
    ErrorResponse,
    Language,
    LanguagesResponse,
    ListResponse,
    ProcessCommandRequest,
    SearchConstraints,
    Suggestions,
)
from voicecart.pipeline.advice import build_suggestions
from voicecart.pipeline.catalog import search_catalog
from voicecart.pipeline.orchestrator import CommandPipeline

logger = structlog.get_logger()

router = APIRouter(tags=["commands"])

PipelineDep = Annotated[CommandPipeline, Depends(get_pipeline)]


def _error(
    status: int,
    code: str,
    message: str,
    *,
    retryable: bool = False,
    detail: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content=ErrorResponse(
            error=code, message=message, retryable=retryable, detail=detail
        ).model_dump(),
    )


@router.post(
    "/process",
    response_model=CommandResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def process_command(body: ProcessCommandRequest, pipeline: PipelineDep) -> CommandResponse:
    """Translate, extract, and apply one natural-language shopping command.

    EmptyInputError and ExtractionUnavailableError propagate to the app-level
    handlers (400 and 503).
    """
    logger.info("process_command", lang=body.lang, chars=len(body.text))
    return await pipeline.process(body.text, body.lang)


@router.get("/search", response_model=CatalogSearchResponse, responses={400: {"model": ErrorResponse}})
async def direct_search(
    q: str | None = None,
    brand: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    size: str | None = None,
    qualifier: str | None = None,
):
    """Catalog search with explicit filters (no language model involved)."""
    if not q or not q.strip():
        return _error(400, "validation_error", "Query param 'q' is required.")
    filters = SearchConstraints(
        brand=brand, min_price=min_price, max_price=max_price, size=size, qualifier=qualifier
    )
    results = search_catalog(q, filters)
    return CatalogSearchResponse(query=q, filters=filters, results=results, count=len(results))


@router.get("/list", response_model=ListResponse)
async def get_list(pipeline: PipelineDep) -> ListResponse:
    return ListResponse(items=pipeline.store.snapshot(), suggestions=build_suggestions())


@router.delete("/list", response_model=ListResponse)
async def clear_list(pipeline: PipelineDep) -> ListResponse:
    pipeline.store.clear()
    logger.info("list_cleared")
    return ListResponse(items=[], message="Shopping list cleared.")


@router.get("/suggestions", response_model=Suggestions)
async def get_suggestions(item: str | None = None) -> Suggestions:
    return build_suggestions(item)


@router.get("/languages", response_model=LanguagesResponse)
async def list_languages() -> LanguagesResponse:
    return LanguagesResponse(
        languages=[Language(code=code, label=label) for code, label in SUPPORTED_LANGUAGES]
    )
