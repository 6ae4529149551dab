"""Shared JSON-over-HTTP helper for the Hugging Face router backends.

Used by translation.py and extraction.py. Every call is bounded by a
round-trip timeout; transport problems and non-2xx statuses are raised as
``BackendError`` so each caller decides whether that is fatal.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx


class BackendError(Exception):
    """An external model backend could not produce a usable reply."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
    *,
    api_key: str,
    timeout: float,
) -> Any:
    """POST ``payload`` with bearer auth and return the decoded JSON body."""
    try:
        # httpx's timeout is per phase; wait_for caps the whole round trip
        response = await asyncio.wait_for(
            client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
                timeout=timeout,
            ),
            timeout=timeout,
        )
    except (httpx.TimeoutException, TimeoutError) as exc:
        raise BackendError(f"Timeout after {timeout:g}s calling {url[:100]}") from exc
    except httpx.RequestError as exc:
        raise BackendError(f"Network error calling {url[:100]}: {type(exc).__name__}") from exc

    if response.status_code >= 400:
        raise BackendError(
            f"HTTP {response.status_code} from {url[:100]}: {response.text[:200]}",
            status_code=response.status_code,
        )

    try:
        return response.json()
    except ValueError as exc:
        raise BackendError(f"Non-JSON body from {url[:100]}") from exc
