"""Core infrastructure: models, errors, validation, logging."""

from dealer_catalog.core.exceptions import (
    CatalogFileReadError,
    CatalogLoadError,
    CatalogParseError,
)
from dealer_catalog.core.models import (
    CatalogSummary,
    DealerProductCount,
    DealerSummary,
    LoadOptions,
    ProductRecord,
    SearchCriteria,
    SearchResult,
)
from dealer_catalog.core.validation import ValidationError


__all__ = [
    "CatalogFileReadError",
    "CatalogLoadError",
    "CatalogParseError",
    "CatalogSummary",
    "DealerProductCount",
    "DealerSummary",
    "LoadOptions",
    "ProductRecord",
    "SearchCriteria",
    "SearchResult",
    "ValidationError",
]
