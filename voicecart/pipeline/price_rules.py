"""Deterministic price constraints.

Price cues in the command text are parsed with fixed patterns and take
precedence over whatever bounds the intent extractor reported. The
precedence rule lives in ``apply_price_override`` and nowhere else.

Note: the equality cue includes the bare word "for", so "search for 5
apples" reads as EQUAL 5. Kept as-is; the ambiguity is known.
"""

from __future__ import annotations

import re

from voicecart.models.contracts import PriceConstraint, PriceOperator, SearchConstraints

_AMOUNT = r"\s*[$\xa3€]?\s*(\d+(?:\.\d{1,2})?)\s*(?:dollars|bucks)?"

# Checked in order; only the first family that matches is reported.
_PRICE_PATTERNS: tuple[tuple[PriceOperator, re.Pattern[str]], ...] = (
    ("LESS_THAN", re.compile(r"(?:under|below|less than|max(?:imum)?)" + _AMOUNT)),
    ("GREATER_THAN", re.compile(r"(?:above|over|more than|min(?:imum)?|greater than)" + _AMOUNT)),
    ("EQUAL", re.compile(r"(?:exactly|for)" + _AMOUNT)),
)


def extract_price_constraint(text: str) -> PriceConstraint | None:
    """Return the highest-priority price constraint found in ``text``, if any."""
    if not text:
        return None
    lowered = text.lower()
    for operator, pattern in _PRICE_PATTERNS:
        match = pattern.search(lowered)
        if match:
            return PriceConstraint(operator=operator, value=float(match.group(1)))
    return None


def resolve_price_bounds(
    min_price: float | None,
    max_price: float | None,
    constraint: PriceConstraint | None,
) -> tuple[float | None, float | None]:
    """Combine extractor bounds with a deterministic constraint.

    The deterministic value replaces the bound it names outright:
    LESS_THAN -> max, GREATER_THAN -> min, EQUAL -> both. The other
    bound is left as the extractor reported it.
    """
    if constraint is None:
        return min_price, max_price
    if constraint.operator == "LESS_THAN":
        return min_price, constraint.value
    if constraint.operator == "GREATER_THAN":
        return constraint.value, max_price
    return constraint.value, constraint.value


def apply_price_override(
    constraints: SearchConstraints,
    constraint: PriceConstraint | None,
) -> SearchConstraints:
    """Return a copy of ``constraints`` with the price override applied."""
    min_price, max_price = resolve_price_bounds(
        constraints.min_price, constraints.max_price, constraint
    )
    return constraints.model_copy(update={"min_price": min_price, "max_price": max_price})
