"""Heuristic classifier for meta-queries ("what should I buy?", "substitute for X?").

Runs on pivot-language text only when extraction produced no actionable
item. Rules are evaluated in priority order; a rule whose handler returns
``None`` falls through to the next one.

History and healthy picks are shuffled per call, so identical state can
give different suggestions. Pass a seeded ``random.Random`` to pin them.
"""

from __future__ import annotations

import random
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

import structlog

from voicecart.data.tables import (
    FREQUENTLY_USED,
    GENERIC_CATEGORIES,
    HEALTHY_OPTIONS,
    SEASONAL_BY_MONTH,
    SUBSTITUTES,
)
from voicecart.models.contracts import (
    AdviceResult,
    FrequentItem,
    GenericCategoryMatch,
    Suggestions,
)
from voicecart.store import HistorySource

log = structlog.get_logger("voicecart.advice")

_SUBSTITUTE_RE = re.compile(r"(?:substitute|alternative|instead)\s+(?:for|of)?\s*([a-z\s]+)")
_ADVICE_CUES = ("suggest", "recommend", "what should", "any ideas", "what to buy", "what do i need")
_SEASON_CUES = ("best", "season")
_HEALTH_CUES = ("healthy", "diet", "nutritious")

MAX_HISTORY_SUGGESTIONS = 3
MAX_HEALTHY_SUGGESTIONS = 3
GENERIC_SUGGESTION_COUNT = 3


# === Table lookups ===


def get_frequent_items(limit: int = 6) -> list[FrequentItem]:
    return [FrequentItem(name=name, category=category) for name, category in FREQUENTLY_USED[:limit]]


def get_substitutes(item_name: str) -> list[str]:
    """Known substitutes: exact key first, then substring containment either way."""
    key = item_name.lower().strip()
    if not key:
        return []
    if key in SUBSTITUTES:
        return list(SUBSTITUTES[key])
    for name, subs in SUBSTITUTES.items():
        if name in key or key in name:
            return list(subs)
    return []


def get_seasonal_items(month: int | None = None) -> list[str]:
    """Seasonal picks for ``month`` (0 = January), defaulting to the current month."""
    if month is None:
        month = date.today().month - 1
    return list(SEASONAL_BY_MONTH.get(month, []))


def build_suggestions(last_item: str | None = None, month: int | None = None) -> Suggestions:
    return Suggestions(
        frequent=get_frequent_items(6),
        substitutes=get_substitutes(last_item) if last_item else [],
        seasonal=get_seasonal_items(month),
    )


def match_generic_category(text: str) -> GenericCategoryMatch | None:
    """Detect a request for a class of items ("household staples") rather than a product."""
    lowered = text.lower()
    for category, cues, items, message in GENERIC_CATEGORIES:
        if any(cue in lowered for cue in cues):
            return GenericCategoryMatch(category=category, results=list(items), message=message)
    return None


# === Advice rules ===


@dataclass(frozen=True)
class _Cues:
    text: str
    advice: bool
    seasonal: bool
    healthy: bool

    @property
    def gated(self) -> bool:
        return self.advice or self.seasonal or self.healthy


@dataclass(frozen=True)
class AdviceRule:
    name: str
    predicate: Callable[[_Cues], bool]
    handler: Callable[[_Cues], AdviceResult | None]


class AdviceClassifier:
    """Ordered cascade of advice rules over a read-only history source."""

    def __init__(
        self,
        history: HistorySource | None = None,
        *,
        rng: random.Random | None = None,
        month: Callable[[], int] | None = None,
    ) -> None:
        self._history = history
        self._rng = rng or random.Random()
        self._month = month or (lambda: date.today().month - 1)
        self.rules: tuple[AdviceRule, ...] = (
            AdviceRule("substitute", lambda c: True, self._substitute),
            # Everything below needs at least one advice/season/health cue
            AdviceRule(
                "history",
                lambda c: c.advice and not c.seasonal and not c.healthy,
                self._history_items,
            ),
            AdviceRule(
                "seasonal",
                lambda c: c.gated and (c.seasonal or "fruit" in c.text),
                self._seasonal,
            ),
            AdviceRule("healthy", lambda c: c.healthy, self._healthy),
            AdviceRule("generic", lambda c: c.gated, self._generic),
        )

    def classify(self, text: str) -> AdviceResult | None:
        lowered = text.lower()
        cues = _Cues(
            text=lowered,
            advice=any(k in lowered for k in _ADVICE_CUES),
            seasonal=any(k in lowered for k in _SEASON_CUES),
            healthy=any(k in lowered for k in _HEALTH_CUES),
        )
        for rule in self.rules:
            if not rule.predicate(cues):
                continue
            result = rule.handler(cues)
            if result is not None:
                log.info("advice_matched", rule=rule.name, suggestions=len(result.suggestions))
                return result
        return None

    def _substitute(self, cues: _Cues) -> AdviceResult | None:
        match = _SUBSTITUTE_RE.search(cues.text)
        if not match:
            return None
        target = re.sub(r"[?!.]", "", match.group(1)).strip()
        subs = get_substitutes(target)
        if not subs:
            return None
        return AdviceResult(
            type="SUBSTITUTE",
            suggestions=subs,
            message=f"Instead of {target}, you could try these alternatives!",
        )

    def _history_items(self, cues: _Cues) -> AdviceResult | None:
        if self._history is None:
            return None
        low = list(self._history.running_low())
        if not low:
            return None
        self._rng.shuffle(low)
        return AdviceResult(
            type="HISTORY",
            suggestions=low[:MAX_HISTORY_SUGGESTIONS],
            message="Looking at your past purchases, you might be running low on these items.",
        )

    def _seasonal(self, cues: _Cues) -> AdviceResult:
        return AdviceResult(
            type="SEASONAL",
            suggestions=get_seasonal_items(self._month()),
            message="Here are some great seasonal picks for this time of year!",
        )

    def _healthy(self, cues: _Cues) -> AdviceResult:
        return AdviceResult(
            type="HEALTHY",
            suggestions=self._rng.sample(HEALTHY_OPTIONS, MAX_HEALTHY_SUGGESTIONS),
            message="Here are some great nutritious and healthy options for you!",
        )

    def _generic(self, cues: _Cues) -> AdviceResult:
        return AdviceResult(
            type="GENERIC",
            suggestions=[item.name for item in get_frequent_items(GENERIC_SUGGESTION_COUNT)],
            message="I can certainly help you brainstorm! Here are some common staples you might need.",
        )
