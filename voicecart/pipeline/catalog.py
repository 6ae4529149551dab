"""In-memory catalog search with AND-combined filters."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from voicecart.data.catalog import CATALOG
from voicecart.models.contracts import Product, SearchConstraints

log = structlog.get_logger("voicecart.catalog")


def _name_matches(product: Product, query: str) -> bool:
    # Both directions: "apple" finds "apples", "a kind of apples" also finds "apples"
    return query in product.name or product.name in query


def _passes_filters(product: Product, constraints: SearchConstraints) -> bool:
    if constraints.brand and constraints.brand.lower() not in product.brand.lower():
        return False
    if constraints.max_price is not None and product.price > constraints.max_price:
        return False
    if constraints.min_price is not None and product.price < constraints.min_price:
        return False
    if constraints.size and constraints.size.lower() not in product.size.lower():
        return False
    if constraints.qualifier:
        qualifier = constraints.qualifier.lower()
        tag_match = any(qualifier in tag for tag in product.tags)
        if not tag_match and qualifier not in product.name:
            return False
    return True


def search_catalog(
    query: str,
    constraints: SearchConstraints | None = None,
    catalog: Iterable[Product] = CATALOG,
) -> list[Product]:
    """Products matching ``query`` and every active constraint, cheapest first.

    Ties keep catalog order (``sorted`` is stable).
    """
    constraints = constraints or SearchConstraints()
    normalized = query.lower().strip()

    matches = [
        product
        for product in catalog
        if _name_matches(product, normalized) and _passes_filters(product, constraints)
    ]
    results = sorted(matches, key=lambda p: p.price)

    log.debug(
        "catalog_search_complete",
        query=normalized,
        filters=constraints.model_dump(exclude_none=True),
        count=len(results),
    )
    return results


def describe_filters(constraints: SearchConstraints) -> str:
    """Human-readable filter summary, e.g. ' (brand: dentafresh, under $4)'."""
    parts: list[str] = []
    if constraints.brand:
        parts.append(f"brand: {constraints.brand}")
    if constraints.max_price is not None:
        parts.append(f"under ${constraints.max_price:g}")
    if constraints.min_price is not None:
        parts.append(f"above ${constraints.min_price:g}")
    if constraints.size:
        parts.append(f"size: {constraints.size}")
    if constraints.qualifier:
        parts.append(constraints.qualifier)
    return f" ({', '.join(parts)})" if parts else ""
