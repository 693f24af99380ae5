"""Turn one raw dealer record into a canonical ProductRecord."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dealer_catalog.core.models import ProductRecord
from dealer_catalog.services.catalog.extractors import (
    as_text,
    extract_dc_availability,
    extract_dc_specific,
    extract_locale_map,
    flatten_attributes,
    optional_text,
)

logger = logging.getLogger(__name__)

# products-<dealer>-<anything>, e.g. products-acme-2024-05.jsonl
DEALER_FILENAME_PATTERN = re.compile(r"products-([A-Za-z0-9_-]+)-")


def resolve_dealer_id(
    file_path: str | Path,
    dealer_id: str | None = None,
    infer_from_filename: bool = True,
) -> str | None:
    """Resolve the dealer for every record of one file.

    Explicit dealer id wins; otherwise the file basename is matched against
    `products-<dealer>-*` when inference is enabled.
    """
    if dealer_id:
        return dealer_id
    if not infer_from_filename:
        return None
    match = DEALER_FILENAME_PATTERN.search(Path(file_path).name)
    if match:
        return match.group(1)
    return None


def normalize_product(
    raw: Any,
    dealer_id: str | None,
    source_file: str,
) -> ProductRecord:
    """Normalize a raw record. Pure; malformed input yields absent fields."""
    if not isinstance(raw, dict):
        raw = {}

    attributes = flatten_attributes(raw.get("attributes"))
    sku = raw.get("sku")

    fields: dict[str, Any] = dict(
        sku=as_text(sku) if sku is not None else "",
        slug=optional_text(raw.get("slug")),
        external_ref=optional_text(raw.get("externalRef")),
        mpn=optional_text(raw.get("mpn")),
        upc_ean=optional_text(raw.get("upc_ean")),
        product_type=optional_text(raw.get("productType")),
        name=extract_locale_map(raw.get("name")),
        description=extract_locale_map(raw.get("description")),
        commodity_type=optional_text(raw.get("commodityType")),
        status=optional_text(raw.get("status")),
        attributes=attributes,
        dealer_id=dealer_id,
        dc_availability=extract_dc_availability(attributes),
        dc_specific=extract_dc_specific(attributes),
        source_file=source_file,
    )
    try:
        return ProductRecord(**fields)
    except PydanticValidationError as e:
        # only the free-form JSON fields can fail, e.g. nesting deeper than the validator allows
        logger.debug("[CATALOG:NORMALIZE] %s: JSON fields degraded to absent: %s", source_file, e)
        fields.update(attributes=None, dc_availability=None, dc_specific=None)
        return ProductRecord(**fields)
