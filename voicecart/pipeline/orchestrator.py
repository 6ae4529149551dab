"""Command pipeline: text + language tag -> one structured response.

Steps per command:
1. Reject empty input (before any network call)
2. Translate to the pivot language (degrades to the original text)
3. Extract a structured intent (failure is terminal for the request)
4. Route:
   - UNKNOWN -> advice classifier, then generic category, else "not understood"
   - ADD_ITEM / REMOVE_ITEM -> list store
   - SEARCH_ITEM -> generic category check, else catalog search with the
     deterministic price override applied

A ``CommandPipeline`` holds no per-request state, so one instance serves
concurrent requests. The only shared mutable state is the injected store.
"""

from __future__ import annotations

import structlog

from voicecart.errors import EmptyInputError
from voicecart.models.contracts import (
    ActionResponse,
    AdviceResponse,
    CommandResponse,
    GenericSearchResponse,
    Intent,
    SearchConstraints,
    SearchResponse,
    TranslationResult,
    UnknownResponse,
)
from voicecart.pipeline.advice import AdviceClassifier, build_suggestions, match_generic_category
from voicecart.pipeline.catalog import describe_filters, search_catalog
from voicecart.pipeline.extraction import IntentExtractor
from voicecart.pipeline.price_rules import apply_price_override, extract_price_constraint
from voicecart.pipeline.translation import TranslationGateway
from voicecart.store import ShoppingListStore

log = structlog.get_logger("voicecart.pipeline")


def constraints_from_intent(intent: Intent) -> SearchConstraints:
    return SearchConstraints(
        brand=intent.brand,
        min_price=intent.min_price,
        max_price=intent.max_price,
        size=intent.size,
        qualifier=intent.qualifier,
    )


class CommandPipeline:
    def __init__(
        self,
        *,
        translator: TranslationGateway,
        extractor: IntentExtractor,
        store: ShoppingListStore,
        advisor: AdviceClassifier | None = None,
    ) -> None:
        self.translator = translator
        self.extractor = extractor
        self.store = store
        self.advisor = advisor or AdviceClassifier(history=store)

    async def process(self, text: str, language_tag: str | None = "en-US") -> CommandResponse:
        if not text or not text.strip():
            raise EmptyInputError("Request must contain a non-empty 'text' field.")
        text = text.strip()

        translation = await self.translator.translate(text, language_tag)
        log.info(
            "command_received",
            language=translation.source_language,
            translated=translation.was_translated,
            degraded=translation.degraded_reason,
        )

        # Raises ExtractionUnavailableError; no retry, no heuristic fallback
        intent = await self.extractor.extract(translation.text)

        if intent.intent == "UNKNOWN" or not intent.item:
            return self._resolve_unknown(text, translation)
        if intent.intent == "SEARCH_ITEM":
            return self._search(text, translation, intent)
        return self._apply_action(text, translation, intent)

    # === Routing ===

    def _common(self, text: str, translation: TranslationResult) -> dict:
        return {
            "original_text": text,
            "translated_text": translation.text if translation.was_translated else None,
            "current_list": self.store.snapshot(),
        }

    def _resolve_unknown(self, text: str, translation: TranslationResult) -> CommandResponse:
        advice = self.advisor.classify(translation.text)
        if advice is not None:
            return AdviceResponse(
                type=advice.type,
                message=advice.message,
                suggestions=advice.suggestions,
                **self._common(text, translation),
            )

        generic = match_generic_category(translation.text)
        if generic is not None:
            log.info("generic_category_matched", category=generic.category, via="unknown")
            return GenericSearchResponse(
                category=generic.category,
                results=generic.results,
                message=generic.message,
                **self._common(text, translation),
            )

        log.info("command_not_understood")
        return UnknownResponse(**self._common(text, translation))

    def _apply_action(self, text: str, translation: TranslationResult, intent: Intent) -> ActionResponse:
        if intent.intent == "ADD_ITEM":
            quantity = intent.quantity or 1
            affected = self.store.add_or_increment(intent.item, quantity)
            message = f'Added {quantity}x "{affected.name}" to your list ({affected.category}).'
            log.info("list_item_added", item=affected.name, quantity=quantity, total=affected.quantity)
            return ActionResponse(
                intent_kind="ADD_ITEM",
                item=intent.item,
                quantity=quantity,
                category=affected.category,
                message=message,
                affected_item=affected,
                suggestions=build_suggestions(intent.item),
                **self._common(text, translation),
            )

        removed = self.store.remove(intent.item)
        if removed is not None:
            message = f'Removed "{removed.name}" from your list.'
        else:
            message = f'"{intent.item}" was not found in your list.'
        log.info("list_item_removed", item=intent.item, found=removed is not None)
        return ActionResponse(
            intent_kind="REMOVE_ITEM",
            item=intent.item,
            quantity=intent.quantity,
            category=removed.category if removed else None,
            message=message,
            affected_item=removed,
            suggestions=build_suggestions(),
            **self._common(text, translation),
        )

    def _search(
        self, text: str, translation: TranslationResult, intent: Intent
    ) -> SearchResponse | GenericSearchResponse:
        generic = match_generic_category(intent.item)
        if generic is not None:
            log.info("generic_category_matched", category=generic.category, via="search")
            return GenericSearchResponse(
                category=generic.category,
                results=generic.results,
                message=generic.message,
                **self._common(text, translation),
            )

        price = extract_price_constraint(translation.text)
        filters = apply_price_override(constraints_from_intent(intent), price)
        results = search_catalog(intent.item, filters)
        list_matches = self.store.search(intent.item)

        summary = describe_filters(filters)
        if results:
            message = f'Found {len(results)} product(s) for "{intent.item}"{summary}.'
        else:
            message = f'No products found for "{intent.item}"{summary}.'

        log.info(
            "catalog_search_complete",
            item=intent.item,
            results=len(results),
            list_matches=len(list_matches),
            price_override=price.operator if price else None,
        )
        return SearchResponse(
            item=intent.item,
            message=message,
            results=results,
            filters=filters,
            price_filter=price,
            list_matches=list_matches,
            **self._common(text, translation),
        )
