"""Stateless filtering and aggregation over a product sequence."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from dealer_catalog.core.models import UNKNOWN_STATUS, ProductRecord, SearchCriteria


def _text_includes(haystack: str | None, needle: str) -> bool:
    if not haystack:
        return False
    return needle in haystack.lower()


def _locale_map_includes(locale_map: dict[str, str] | None, needle: str) -> bool:
    if not locale_map:
        return False
    return any(needle in (text or "").lower() for text in locale_map.values())


def is_available(flag: Any) -> bool:
    """Region flags count as available only when numerically equal to 1.

    `true` and `"1"` are not available.
    """
    if isinstance(flag, bool) or not isinstance(flag, (int, float)):
        return False
    return flag == 1


def matches_query(product: ProductRecord, query: str) -> bool:
    """Case-insensitive substring match on identifiers and localized text."""
    needle = query.lower()
    return (
        _text_includes(product.sku, needle)
        or _text_includes(product.mpn, needle)
        or _text_includes(product.upc_ean, needle)
        or _text_includes(product.product_type, needle)
        or _text_includes(product.slug, needle)
        or _text_includes(product.external_ref, needle)
        or _locale_map_includes(product.name, needle)
        or _locale_map_includes(product.description, needle)
    )


def matches_availability(product: ProductRecord, dc_code: str | None, region: str | None) -> bool:
    availability = product.dc_availability or {}

    if dc_code:
        entry = availability.get(dc_code)
        if entry is None:
            return False
        if region:
            return isinstance(entry, dict) and is_available(entry.get(region))
        return True

    if region:
        return any(
            isinstance(entry, dict) and is_available(entry.get(region))
            for entry in availability.values()
        )

    return True


def matches(product: ProductRecord, criteria: SearchCriteria) -> bool:
    """True when `product` satisfies every supplied criterion."""
    if criteria.dealer_id and (product.dealer_id or "") != criteria.dealer_id:
        return False
    if criteria.sku and product.sku != criteria.sku:
        return False
    if criteria.mpn and (product.mpn or "") != criteria.mpn:
        return False
    if criteria.upc and (product.upc_ean or "") != criteria.upc:
        return False
    if criteria.status and (product.status or "") != criteria.status:
        return False

    query = (criteria.query or "").strip()
    if query and not matches_query(product, query):
        return False

    return matches_availability(product, criteria.dc_code, criteria.region)


def filter_products(
    products: Iterable[ProductRecord],
    criteria: SearchCriteria,
) -> list[ProductRecord]:
    """Products matching all criteria, in their original order."""
    return [product for product in products if matches(product, criteria)]


def paginate(items: Sequence[ProductRecord], offset: int, limit: int) -> list[ProductRecord]:
    return list(items[offset : offset + limit])


def summarize_statuses(products: Iterable[ProductRecord]) -> dict[str, int]:
    """Count products per status; missing status counts as "unknown"."""
    counts: dict[str, int] = {}
    for product in products:
        status = product.status if product.status is not None else UNKNOWN_STATUS
        counts[status] = counts.get(status, 0) + 1
    return counts


def summarize_distribution_centers(products: Iterable[ProductRecord]) -> dict[str, int]:
    """Count products per DC code present in dc_availability, regardless of flags."""
    counts: dict[str, int] = {}
    for product in products:
        if not product.dc_availability:
            continue
        for dc_code in product.dc_availability:
            counts[dc_code] = counts.get(dc_code, 0) + 1
    return counts
