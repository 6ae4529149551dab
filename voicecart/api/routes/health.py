"""Health check endpoint.

Reports whether each backend credential is configured. No network probes:
the model backends are pay-per-call, and a missing key is the common
failure worth surfacing.
"""

from __future__ import annotations

from fastapi import APIRouter

from voicecart import __version__
from voicecart.config import settings

router = APIRouter(tags=["health"])


def _configured(value: str) -> str:
    return "configured" if value else "not_configured"


@router.get("/health")
async def health_check() -> dict:
    """Always 200 so load balancers keep routing; degraded backends show per key."""
    intent_key = (
        settings.anthropic_api_key if settings.intent_backend == "anthropic" else settings.hf_api_key
    )
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.environment,
        "intent_backend": settings.intent_backend,
        "intent_credential": _configured(intent_key),
        "translation_credential": _configured(settings.hf_api_key),
    }
