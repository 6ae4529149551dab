"""FastAPI dependencies.

The pipeline and its list store are built once per process and shared by
all requests. Tests swap them via ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from voicecart.pipeline.advice import AdviceClassifier
from voicecart.pipeline.extraction import build_extractor
from voicecart.pipeline.orchestrator import CommandPipeline
from voicecart.pipeline.translation import TranslationGateway
from voicecart.store import InMemoryShoppingList


@lru_cache(maxsize=1)
def get_pipeline() -> CommandPipeline:
    store = InMemoryShoppingList()
    return CommandPipeline(
        translator=TranslationGateway(),
        extractor=build_extractor(),
        store=store,
        advisor=AdviceClassifier(history=store),
    )
