"""In-memory catalog store.

Holds the ordered product log plus two indexes derived from it:
dealer -> products and dealer -> source files. One lock guards all three,
so an append (and a reset) is seen by readers either fully or not at all.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from threading import Lock

from dealer_catalog.core.models import UNKNOWN_DEALER, ProductRecord


@dataclass(frozen=True)
class CatalogSnapshot:
    """Point-in-time, read-only view of the store."""

    products: tuple[ProductRecord, ...]
    products_by_dealer: dict[str, tuple[ProductRecord, ...]]
    files_by_dealer: dict[str, tuple[str, ...]]

    def dealer_products(self, dealer_id: str) -> tuple[ProductRecord, ...]:
        return self.products_by_dealer.get(dealer_id, ())


class CatalogStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._products: list[ProductRecord] = []
        self._products_by_dealer: dict[str, list[ProductRecord]] = {}
        # dict used as an insertion-ordered set
        self._files_by_dealer: dict[str, dict[str, None]] = {}

    def add(self, product: ProductRecord) -> None:
        """Append one record and update both indexes atomically."""
        with self._lock:
            self._append(product)

    def add_many(self, products: Iterable[ProductRecord]) -> int:
        """Append records in order; each append is its own critical section."""
        added = 0
        for product in products:
            self.add(product)
            added += 1
        return added

    def _append(self, product: ProductRecord) -> None:
        dealer = product.dealer_id or UNKNOWN_DEALER
        self._products.append(product)
        self._products_by_dealer.setdefault(dealer, []).append(product)
        self._files_by_dealer.setdefault(dealer, {})[product.source_file] = None

    def clear(self) -> None:
        with self._lock:
            self._products = []
            self._products_by_dealer = {}
            self._files_by_dealer = {}

    def snapshot(self) -> CatalogSnapshot:
        with self._lock:
            return CatalogSnapshot(
                products=tuple(self._products),
                products_by_dealer={
                    dealer: tuple(items) for dealer, items in self._products_by_dealer.items()
                },
                files_by_dealer={
                    dealer: tuple(files) for dealer, files in self._files_by_dealer.items()
                },
            )

    @property
    def products(self) -> tuple[ProductRecord, ...]:
        with self._lock:
            return tuple(self._products)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)
