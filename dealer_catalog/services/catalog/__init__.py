"""Catalog ingestion, storage and search."""

from dealer_catalog.services.catalog.loader import CatalogLoader, expand_patterns
from dealer_catalog.services.catalog.normalizer import normalize_product, resolve_dealer_id
from dealer_catalog.services.catalog.search import (
    filter_products,
    summarize_distribution_centers,
    summarize_statuses,
)
from dealer_catalog.services.catalog.service import CatalogService
from dealer_catalog.services.catalog.store import CatalogSnapshot, CatalogStore


__all__ = [
    "CatalogLoader",
    "CatalogService",
    "CatalogSnapshot",
    "CatalogStore",
    "expand_patterns",
    "filter_products",
    "normalize_product",
    "resolve_dealer_id",
    "summarize_distribution_centers",
    "summarize_statuses",
]
