"""Shared fixtures: a scripted intent backend, a fresh store, and an ASGI client.

Nothing here touches the network. Translation runs without a credential,
so non-English tags fall back to the original text unless a test injects
its own HTTP client.
"""

from __future__ import annotations

import json
import random

import httpx
import pytest

from voicecart.api.deps import get_pipeline
from voicecart.main import app
from voicecart.pipeline.advice import AdviceClassifier
from voicecart.pipeline.extraction import IntentExtractor
from voicecart.pipeline.orchestrator import CommandPipeline
from voicecart.pipeline.translation import TranslationGateway
from voicecart.store import InMemoryShoppingList

UNKNOWN_REPLY = json.dumps({"intent": "UNKNOWN", "item": None, "quantity": None, "language": "en"})


def reply(intent: str, item: str | None = None, **extra) -> str:
    """Build a backend reply the way the model is asked to format it."""
    payload = {"intent": intent, "item": item, "quantity": None, "language": "en"}
    payload.update(extra)
    return json.dumps(payload)


class ScriptedExtractor(IntentExtractor):
    """Extractor whose backend replies are looked up by the sentence in the prompt."""

    name = "scripted"

    def __init__(self) -> None:
        self.replies: dict[str, str] = {}
        self.default = UNKNOWN_REPLY
        self.error: Exception | None = None
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        for sentence, raw in self.replies.items():
            if f'Sentence: "{sentence}"' in prompt:
                return raw
        return self.default


@pytest.fixture
def extractor() -> ScriptedExtractor:
    return ScriptedExtractor()


@pytest.fixture
def store() -> InMemoryShoppingList:
    return InMemoryShoppingList()


@pytest.fixture
def pipeline(extractor, store) -> CommandPipeline:
    return CommandPipeline(
        translator=TranslationGateway(api_key=""),
        extractor=extractor,
        store=store,
        advisor=AdviceClassifier(history=store, rng=random.Random(7), month=lambda: 9),
    )


@pytest.fixture
async def client(pipeline):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
