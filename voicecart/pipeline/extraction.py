"""Structured intent extraction via an LLM backend.

Pipeline per call:
1. Fill the extraction prompt (schema, category mappings, examples)
2. Send it to the configured backend (Hugging Face router or Anthropic)
3. Pull the first balanced JSON object out of the reply
4. Validate it into an ``Intent``

Unlike translation there is no fallback: any failure raises
``ExtractionUnavailableError``. A silent guess could mutate the wrong item.
"""

from __future__ import annotations

import abc
import asyncio
import json
from pathlib import Path
from typing import Any

import anthropic
import httpx
import pydantic
import structlog

from voicecart.config import settings
from voicecart.errors import ExtractionUnavailableError
from voicecart.models.contracts import Intent
from voicecart.utils.http import BackendError, post_json

log = structlog.get_logger("voicecart.extraction")

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

MAX_TOKENS = 200  # a single small JSON object
TEMPERATURE = 0.1

VALID_INTENTS = {"ADD_ITEM", "REMOVE_ITEM", "SEARCH_ITEM", "UNKNOWN"}


# === Prompt ===

_prompt_cache: str | None = None


def _load_prompt_template() -> str:
    global _prompt_cache  # noqa: PLW0603
    if _prompt_cache is None:
        _prompt_cache = (PROMPTS_DIR / "intent_extraction.txt").read_text(encoding="utf-8")
    return _prompt_cache


def build_prompt(text: str) -> str:
    return _load_prompt_template().format(user_text=text.strip())


# === Reply parsing ===


def _strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```), if any."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    text = text.removeprefix("```")
    for lang in ("json", "JSON"):
        text = text.removeprefix(lang)
    text = text.lstrip("\n")
    return text.rsplit("```", 1)[0].strip()


def _extract_json(text: str) -> dict[str, Any] | None:
    """Return the first balanced JSON object in ``text``, or None.

    Tolerates prose before and after the object and braces inside strings.
    """
    text = _strip_code_fence(text)
    if not text:
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None
    if isinstance(data, dict):
        return data
    # Not a bare object (prose, or e.g. an array wrapping one): scan for braces

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escape_next = False
        for i in range(start, len(text)):
            ch = text[i]
            if escape_next:
                escape_next = False
                continue
            if in_string:
                if ch == "\\":
                    escape_next = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    try:
                        data = json.loads(text[start : i + 1])
                    except json.JSONDecodeError:
                        break
                    return data if isinstance(data, dict) else None
        # Unbalanced or undecodable span; try the next opening brace
        start = text.find("{", start + 1)
    return None


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _optional_price(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value >= 0 else None


def _optional_quantity(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 1:
        return value
    return None


def parse_intent_payload(raw: str) -> Intent:
    """Validate a raw backend reply into an ``Intent``.

    Raises ExtractionUnavailableError when there is no JSON object, the
    intent tag is unknown, or an actionable intent has no usable item.
    Optional fields with the wrong type are dropped rather than failing.
    """
    data = _extract_json(raw)
    if data is None:
        raise ExtractionUnavailableError(f"Backend returned no JSON. Raw output: {raw[:200]!r}")

    kind = data.get("intent")
    if kind not in VALID_INTENTS:
        raise ExtractionUnavailableError(f"Backend returned invalid intent: {kind!r}")

    item = data.get("item")
    if kind != "UNKNOWN" and (not isinstance(item, str) or not item.strip()):
        raise ExtractionUnavailableError(f"Backend returned missing or invalid item for {kind}")

    fields: dict[str, Any] = {
        "intent": kind,
        "item": item.lower().strip() if kind != "UNKNOWN" else None,
        "quantity": _optional_quantity(data.get("quantity")),
        "language": (_optional_str(data.get("language")) or "en").lower(),
        "source": "llm",
    }
    if kind == "SEARCH_ITEM":
        fields.update(
            brand=_optional_str(data.get("brand")),
            min_price=_optional_price(data.get("min_price")),
            max_price=_optional_price(data.get("max_price")),
            size=_optional_str(data.get("size")),
            qualifier=_optional_str(data.get("qualifier")),
        )

    try:
        return Intent(**fields)
    except pydantic.ValidationError as exc:
        raise ExtractionUnavailableError(f"Backend payload failed validation: {exc}") from exc


# === Extractors ===


class IntentExtractor(abc.ABC):
    """Turns pivot-language text into an ``Intent`` or raises ExtractionUnavailableError."""

    name: str = "base"

    @abc.abstractmethod
    async def complete(self, prompt: str) -> str:
        """Send ``prompt`` to the backend and return its raw text reply."""

    async def extract(self, text: str) -> Intent:
        raw = await self.complete(build_prompt(text))
        intent = parse_intent_payload(raw)
        log.info(
            "intent_extracted",
            backend=self.name,
            intent=intent.intent,
            item=intent.item,
            quantity=intent.quantity,
            language=intent.language,
        )
        return intent


class HuggingFaceIntentExtractor(IntentExtractor):
    """Chat completions on the Hugging Face router (OpenAI-compatible)."""

    name = "huggingface"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = settings.hf_api_key if api_key is None else api_key
        self.model = model or settings.intent_model
        self.url = url or settings.hf_chat_url
        self.timeout = timeout or settings.backend_timeout_seconds
        self._http_client = http_client

    async def complete(self, prompt: str) -> str:
        if not self.api_key:
            raise ExtractionUnavailableError(
                "HF_API_KEY is not set",
                hint="Add HF_API_KEY to your environment or .env file.",
            )

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "stream": False,
        }
        try:
            if self._http_client is not None:
                data = await post_json(
                    self._http_client, self.url, payload, api_key=self.api_key, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    data = await post_json(
                        client, self.url, payload, api_key=self.api_key, timeout=self.timeout
                    )
        except BackendError as exc:
            log.error("intent_backend_failed", backend=self.name, status=exc.status_code, error=str(exc))
            raise ExtractionUnavailableError(str(exc)) from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise ExtractionUnavailableError("Unexpected response shape from Hugging Face") from exc
        if not isinstance(content, str) or not content.strip():
            raise ExtractionUnavailableError("Empty completion from Hugging Face")
        return content.strip()


class AnthropicIntentExtractor(IntentExtractor):
    """Claude Messages API. The SDK's own retries are disabled."""

    name = "anthropic"

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self.api_key = settings.anthropic_api_key if api_key is None else api_key
        self.model = model or settings.anthropic_model
        self.timeout = timeout or settings.backend_timeout_seconds
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self.api_key:
                raise ExtractionUnavailableError(
                    "ANTHROPIC_API_KEY is not set",
                    hint="Add ANTHROPIC_API_KEY to your environment or .env file.",
                )
            self._client = anthropic.AsyncAnthropic(
                api_key=self.api_key, timeout=self.timeout, max_retries=0
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await asyncio.wait_for(
                client.messages.create(
                    model=self.model,
                    max_tokens=MAX_TOKENS,
                    temperature=TEMPERATURE,
                    messages=[{"role": "user", "content": prompt}],
                ),
                timeout=self.timeout,
            )
        except TimeoutError as exc:
            log.error("intent_backend_timeout", backend=self.name, timeout=self.timeout)
            raise ExtractionUnavailableError(f"Claude timed out after {self.timeout:g}s") from exc
        except anthropic.APIStatusError as exc:
            log.error("intent_backend_failed", backend=self.name, status=exc.status_code)
            raise ExtractionUnavailableError(f"Claude API error ({exc.status_code}): {exc}") from exc
        except anthropic.APIError as exc:
            log.error("intent_backend_failed", backend=self.name, error=type(exc).__name__)
            raise ExtractionUnavailableError(f"Claude API unreachable: {exc}") from exc

        text = ""
        for block in response.content:
            if hasattr(block, "text"):
                text += block.text
        return text


def build_extractor(backend: str | None = None) -> IntentExtractor:
    """Construct the extractor named by ``backend`` (default: settings.intent_backend)."""
    backend = backend or settings.intent_backend
    if backend == "huggingface":
        return HuggingFaceIntentExtractor()
    if backend == "anthropic":
        return AnthropicIntentExtractor()
    raise ValueError(f"Unknown intent backend: {backend!r}")
