"""Typed contracts shared by the loader, the query engine and the service.

This module defines the unified data contracts for:
- ProductRecord (one normalized observation of a dealer product)
- SearchCriteria / LoadOptions (caller input)
- SearchResult, DealerSummary, DealerProductCount, CatalogSummary (query output)
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, JsonValue


LocaleMap = dict[str, str]

# DC code -> {region code -> 0|1, ...}; values are kept as decoded
DcAvailability = dict[str, JsonValue]

# DC code -> arbitrary dealer override object
DcSpecific = dict[str, JsonValue]

UNKNOWN_DEALER = "unknown"
UNKNOWN_STATUS = "unknown"


class ProductRecord(BaseModel):
    """
    Canonical product record produced by the normalizer.

    Immutable once built. The same SKU loaded from two files yields two
    independent records; the catalog is an append log, not a keyed table.
    Absent optional fields are None, never the string "null".
    """

    sku: str = ""
    slug: str | None = None
    external_ref: str | None = Field(default=None, serialization_alias="externalRef")
    mpn: str | None = None
    upc_ean: str | None = None
    product_type: str | None = Field(default=None, serialization_alias="productType")
    name: LocaleMap | None = None
    description: LocaleMap | None = None
    commodity_type: str | None = Field(default=None, serialization_alias="commodityType")
    status: str | None = None
    attributes: dict[str, JsonValue] | None = None
    dealer_id: str | None = Field(default=None, serialization_alias="dealerId")
    dc_availability: DcAvailability | None = None
    dc_specific: DcSpecific | None = None
    source_file: str = Field(default="", serialization_alias="sourceFile")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping using the export field names."""
        return self.model_dump(mode="json", by_alias=True)


class SearchCriteria(BaseModel):
    """Filters for a product search. Every supplied filter must match (AND)."""

    dealer_id: str | None = Field(default=None, validation_alias=AliasChoices("dealer_id", "dealerId"))
    query: str | None = None
    sku: str | None = None
    mpn: str | None = None
    upc: str | None = None
    status: str | None = None
    dc_code: str | None = Field(default=None, validation_alias=AliasChoices("dc_code", "dcCode"))
    region: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class LoadOptions(BaseModel):
    """Input for a load call."""

    paths: list[str] = Field(..., min_length=1)
    dealer_id: str | None = None
    infer_dealer_from_filename: bool = True
    clear_before_load: bool = False

    model_config = ConfigDict(extra="forbid")


class SearchResult(BaseModel):
    """One page of search results plus the pre-pagination total."""

    total: int
    offset: int
    limit: int
    results: list[ProductRecord]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "offset": self.offset,
            "limit": self.limit,
            "results": [product.to_dict() for product in self.results],
        }


class DealerSummary(BaseModel):
    """High-level view of one dealer's slice of the catalog."""

    dealer_id: str = Field(serialization_alias="dealerId")
    product_count: int = Field(serialization_alias="productCount")
    statuses: dict[str, int] = Field(default_factory=dict)
    distribution_centers: list[str] = Field(
        default_factory=list, serialization_alias="distributionCenters"
    )
    files: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class DealerProductCount(BaseModel):
    """Number of records loaded for one dealer."""

    dealer_id: str = Field(serialization_alias="dealerId")
    count: int

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class CatalogSummary(BaseModel):
    """Totals across the whole catalog."""

    total_products: int = Field(serialization_alias="totalProducts")
    by_dealer: dict[str, int] = Field(default_factory=dict, serialization_alias="byDealer")
    by_status: dict[str, int] = Field(default_factory=dict, serialization_alias="byStatus")
    by_dc: dict[str, int] = Field(default_factory=dict, serialization_alias="byDc")
    sample_skus: list[str] = Field(default_factory=list, serialization_alias="sampleSkus")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
