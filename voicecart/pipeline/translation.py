"""Translation gateway: normalise command text to the pivot language.

Uses Helsinki-NLP opus-mt models on the Hugging Face inference router.
This step never raises. Missing models, missing credentials, timeouts and
bad payloads all fall back to the original text with
``was_translated=False``, and the reason is logged.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from voicecart.config import settings
from voicecart.models.contracts import TranslationResult
from voicecart.utils.http import BackendError, post_json

log = structlog.get_logger("voicecart.translation")


def language_prefix(language_tag: str | None, default: str = "en") -> str:
    """Primary subtag of a BCP-47 tag: "hi-IN" -> "hi"."""
    if not language_tag or not language_tag.strip():
        return default
    return language_tag.strip().replace("_", "-").split("-")[0].lower()


def _parse_translation(data: Any) -> str:
    # opus-mt replies [{"translation_text": "..."}]
    if isinstance(data, list) and data and isinstance(data[0], dict):
        text = data[0].get("translation_text")
        if isinstance(text, str) and text.strip():
            return text.strip()
    raise BackendError("Unexpected translation response shape")


class TranslationGateway:
    def __init__(
        self,
        *,
        api_key: str | None = None,
        models: dict[str, str] | None = None,
        pivot_language: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = settings.hf_api_key if api_key is None else api_key
        self.models = settings.translation_models if models is None else models
        self.pivot_language = pivot_language or settings.pivot_language
        self.base_url = (base_url or settings.hf_inference_url).rstrip("/")
        self.timeout = timeout or settings.backend_timeout_seconds
        self._http_client = http_client

    def _fallback(self, text: str, language: str, reason: str) -> TranslationResult:
        return TranslationResult(
            text=text,
            was_translated=False,
            source_language=language,
            degraded_reason=reason,
        )

    async def translate(self, text: str, language_tag: str | None) -> TranslationResult:
        language = language_prefix(language_tag, default=self.pivot_language)

        if language == self.pivot_language:
            return TranslationResult(text=text, was_translated=False, source_language=language)

        model_id = self.models.get(language)
        if not model_id:
            log.warning("translation_no_model", language=language)
            return self._fallback(text, language, "no_model")

        if not self.api_key:
            log.warning("translation_no_credential", language=language)
            return self._fallback(text, language, "no_credential")

        payload = {"inputs": text, "options": {"wait_for_model": True}}
        url = f"{self.base_url}/{model_id}"
        try:
            if self._http_client is not None:
                data = await post_json(
                    self._http_client, url, payload, api_key=self.api_key, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    data = await post_json(
                        client, url, payload, api_key=self.api_key, timeout=self.timeout
                    )
            translated = _parse_translation(data)
        except BackendError as exc:
            log.warning("translation_failed", language=language, model=model_id, error=str(exc))
            return self._fallback(text, language, "backend_error")

        log.info("translation_complete", language=language, model=model_id, chars=len(translated))
        return TranslationResult(text=translated, was_translated=True, source_language=language)
