"""
Catalog Service - operations exposed to collaborators.
======================================================
Owns one CatalogStore and wires the loader and the query engine to it.
Results are pydantic models; call `.to_dict()` for JSON-ready output.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from dealer_catalog.conf.config import Settings, get_settings
from dealer_catalog.core.exceptions import CatalogLoadError
from dealer_catalog.core.models import (
    CatalogSummary,
    DealerProductCount,
    DealerSummary,
    LoadOptions,
    ProductRecord,
    SearchCriteria,
    SearchResult,
)
from dealer_catalog.core.validation import ValidationError, validate_model, validate_page
from dealer_catalog.services.catalog.loader import CatalogLoader
from dealer_catalog.services.catalog.search import (
    filter_products,
    paginate,
    summarize_distribution_centers,
    summarize_statuses,
)
from dealer_catalog.services.catalog.store import CatalogStore

logger = logging.getLogger(__name__)


class CatalogService:
    """
    In-memory dealer product catalog.

    Each instance owns its own store; nothing is shared between instances.
    """

    def __init__(self, settings: Settings | None = None, store: CatalogStore | None = None) -> None:
        self.settings = settings or get_settings()
        self.store = store if store is not None else CatalogStore()
        self.loader = CatalogLoader(self.store, max_workers=self.settings.LOAD_WORKERS)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def load_files(
        self,
        paths: Sequence[str],
        *,
        dealer_id: str | None = None,
        infer_dealer_from_filename: bool = True,
        clear_before_load: bool = False,
    ) -> int:
        """Load JSON / JSON Lines exports; return the number of records added.

        Raises:
            ValidationError: If `paths` is empty or a single string
            CatalogLoadError: If a matched file cannot be read or parsed
        """
        if isinstance(paths, (str, bytes)):
            raise ValidationError("paths", "must be a list of paths, not a single string")
        options = validate_model(
            LoadOptions,
            {
                "paths": list(paths),
                "dealer_id": dealer_id,
                "infer_dealer_from_filename": infer_dealer_from_filename,
                "clear_before_load": clear_before_load,
            },
        )
        if options.clear_before_load:
            self.clear()
        return self.loader.load_files(
            options.paths,
            dealer_id=options.dealer_id,
            infer_dealer_from_filename=options.infer_dealer_from_filename,
        )

    def clear(self) -> None:
        self.store.clear()
        logger.info("[CATALOG] Store cleared")

    def preload(self) -> int:
        """Load PRELOAD_GLOBS. Failures are logged, never raised."""
        patterns = self.settings.preload_patterns
        if not patterns:
            return 0
        try:
            loaded = self.loader.load_files(
                patterns,
                infer_dealer_from_filename=self.settings.INFER_DEALER_FROM_FILENAME,
            )
        except CatalogLoadError as e:
            logger.error("[CATALOG] Preload failed: %s", e)
            return 0
        logger.info("[CATALOG] Preloaded %d products from %s", loaded, ", ".join(patterns))
        return loaded

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def list_dealers(self) -> list[str]:
        return list(self.store.snapshot().products_by_dealer)

    def get_dealer_summary(self, dealer_id: str) -> DealerSummary:
        snapshot = self.store.snapshot()
        products = snapshot.dealer_products(dealer_id)
        return DealerSummary(
            dealer_id=dealer_id,
            product_count=len(products),
            statuses=summarize_statuses(products),
            distribution_centers=list(summarize_distribution_centers(products)),
            files=list(snapshot.files_by_dealer.get(dealer_id, ())),
        )

    def get_dealer_product_count(self, dealer_id: str) -> DealerProductCount:
        count = len(self.store.snapshot().dealer_products(dealer_id))
        return DealerProductCount(dealer_id=dealer_id, count=count)

    def get_product_by_sku(self, sku: str, dealer_id: str | None = None) -> ProductRecord | None:
        """First product with this SKU by load order, optionally within one dealer."""
        snapshot = self.store.snapshot()
        pool = snapshot.dealer_products(dealer_id) if dealer_id else snapshot.products
        return next((product for product in pool if product.sku == sku), None)

    def search(
        self,
        criteria: SearchCriteria | dict[str, Any] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> SearchResult:
        """Filter the catalog and return one page plus the total match count.

        Raises:
            ValidationError: If a criterion is unknown, offset < 0 or limit is
                outside [1, MAX_SEARCH_LIMIT]
        """
        if criteria is None:
            criteria = SearchCriteria()
        elif not isinstance(criteria, SearchCriteria):
            criteria = validate_model(SearchCriteria, dict(criteria))

        if limit is None:
            limit = self.settings.DEFAULT_SEARCH_LIMIT
        offset, limit = validate_page(offset, limit, max_limit=self.settings.MAX_SEARCH_LIMIT)

        filtered = filter_products(self.store.products, criteria)
        return SearchResult(
            total=len(filtered),
            offset=offset,
            limit=limit,
            results=paginate(filtered, offset, limit),
        )

    def get_distribution_center_counts(self, dealer_id: str | None = None) -> dict[str, int]:
        snapshot = self.store.snapshot()
        pool = snapshot.dealer_products(dealer_id) if dealer_id else snapshot.products
        return summarize_distribution_centers(pool)

    def get_catalog_summary(self) -> CatalogSummary:
        snapshot = self.store.snapshot()
        return CatalogSummary(
            total_products=len(snapshot.products),
            by_dealer={dealer: len(items) for dealer, items in snapshot.products_by_dealer.items()},
            by_status=summarize_statuses(snapshot.products),
            by_dc=summarize_distribution_centers(snapshot.products),
            sample_skus=[p.sku for p in snapshot.products[: self.settings.SAMPLE_SKU_COUNT]],
        )

    def list_loaded_files(self) -> dict[str, list[str]]:
        return {dealer: list(files) for dealer, files in self.store.snapshot().files_by_dealer.items()}
