"""VoiceCart contract models.

Request/response payloads for the HTTP layer plus the per-request records
that flow through the intent pipeline. Everything except ``Product`` is
created per request and discarded once the response is built.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

IntentKind = Literal["ADD_ITEM", "REMOVE_ITEM", "SEARCH_ITEM", "UNKNOWN"]
PriceOperator = Literal["LESS_THAN", "GREATER_THAN", "EQUAL"]
AdviceType = Literal["SUBSTITUTE", "HISTORY", "SEASONAL", "HEALTHY", "GENERIC"]
GenericCategory = Literal["staples", "household", "essentials"]

# === Pipeline Records ===


class Intent(BaseModel):
    """Structured reading of one command, as returned by an extractor."""

    intent: IntentKind
    item: str | None = None
    quantity: int | None = Field(default=None, ge=1)
    language: str = "en"  # ISO 639-1, informational only
    source: str = "llm"

    # Optional constraints the extractor may report for SEARCH_ITEM
    brand: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    size: str | None = None
    qualifier: str | None = None

    @model_validator(mode="after")
    def _check_item(self) -> Intent:
        if self.intent == "UNKNOWN":
            if self.item is not None:
                raise ValueError("UNKNOWN intent must not carry an item")
        elif not self.item or not self.item.strip():
            raise ValueError(f"{self.intent} intent requires a non-empty item")
        return self


class SearchConstraints(BaseModel):
    """Catalog filters. ``None`` means no restriction; price bounds are inclusive."""

    brand: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    size: str | None = None
    qualifier: str | None = None


class PriceConstraint(BaseModel):
    """Price condition read deterministically from the command text."""

    operator: PriceOperator
    value: float = Field(ge=0)


class TranslationResult(BaseModel):
    text: str
    was_translated: bool
    source_language: str
    degraded_reason: str | None = None


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    brand: str
    size: str
    price: float = Field(ge=0)
    category: str
    tags: tuple[str, ...] = ()


class ListItem(BaseModel):
    id: int
    name: str
    quantity: int = Field(ge=1)
    category: str
    added_at: str  # ISO8601


class AdviceResult(BaseModel):
    type: AdviceType
    suggestions: list[str]
    message: str


class GenericCategoryMatch(BaseModel):
    category: GenericCategory
    results: list[str]
    message: str


class FrequentItem(BaseModel):
    name: str
    category: str


class Suggestions(BaseModel):
    frequent: list[FrequentItem] = []
    substitutes: list[str] = []
    seasonal: list[str] = []


# === HTTP Requests ===


class ProcessCommandRequest(BaseModel):
    text: str
    lang: str = "en-US"  # BCP-47 tag from the browser's speech recognizer


# === HTTP Responses ===


class _CommandResponse(BaseModel):
    original_text: str
    translated_text: str | None = None  # set only when translation happened
    current_list: list[ListItem] = []


class ActionResponse(_CommandResponse):
    response_type: Literal["action"] = "action"
    intent_kind: Literal["ADD_ITEM", "REMOVE_ITEM"]
    item: str
    quantity: int | None = None
    category: str | None = None
    message: str
    affected_item: ListItem | None = None
    suggestions: Suggestions | None = None


class SearchResponse(_CommandResponse):
    response_type: Literal["search"] = "search"
    intent_kind: Literal["SEARCH_ITEM"] = "SEARCH_ITEM"
    item: str
    message: str
    results: list[Product] = []
    filters: SearchConstraints = SearchConstraints()
    price_filter: PriceConstraint | None = None
    list_matches: list[ListItem] = []


class GenericSearchResponse(_CommandResponse):
    response_type: Literal["generic_search"] = "generic_search"
    intent_kind: Literal["SEARCH_ITEM"] = "SEARCH_ITEM"
    search_type: Literal["GENERIC"] = "GENERIC"
    category: GenericCategory
    results: list[str]
    message: str


class AdviceResponse(_CommandResponse):
    response_type: Literal["advice"] = "advice"
    intent_kind: Literal["SUGGEST_ITEMS"] = "SUGGEST_ITEMS"
    type: AdviceType
    message: str
    suggestions: list[str]


class UnknownResponse(_CommandResponse):
    response_type: Literal["unknown"] = "unknown"
    intent_kind: Literal["UNKNOWN"] = "UNKNOWN"
    message: str = "Sorry, I could not understand that command."


# Tagged union on response_type
CommandResponse = Annotated[
    ActionResponse | SearchResponse | GenericSearchResponse | AdviceResponse | UnknownResponse,
    Field(discriminator="response_type"),
]


class CatalogSearchResponse(BaseModel):
    query: str
    filters: SearchConstraints
    results: list[Product]
    count: int


class ListResponse(BaseModel):
    items: list[ListItem]
    suggestions: Suggestions | None = None
    message: str | None = None


class Language(BaseModel):
    code: str
    label: str


class LanguagesResponse(BaseModel):
    languages: list[Language]


class ErrorResponse(BaseModel):
    error: str
    message: str
    retryable: bool
    detail: str | None = None
