"""
dealer_catalog - in-memory catalog of dealer product exports.

Loads per-dealer JSON / JSON Lines exports, normalizes every record into a
ProductRecord and answers search and aggregation queries over them.
"""

__version__ = "0.1.0"

from dealer_catalog.core.models import ProductRecord, SearchCriteria
from dealer_catalog.services.catalog.service import CatalogService

__all__ = [
    "CatalogService",
    "ProductRecord",
    "SearchCriteria",
]
