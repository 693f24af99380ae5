import json
import sys
from pathlib import Path

import pytest


# Add project root to path
root = Path(__file__).resolve().parents[1]
project_root = str(root)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from dealer_catalog.conf.config import Settings  # noqa: E402
from dealer_catalog.services.catalog.service import CatalogService  # noqa: E402


def make_raw_product(
    sku: str,
    *,
    status: str | None = "active",
    name: object = None,
    dc_availability: object = None,
    **extra: object,
) -> dict:
    """Raw dealer record in the export shape (template-group attributes)."""
    raw: dict = {"sku": sku, "status": status, **extra}
    raw["name"] = name if name is not None else [{"locale": "en", "value": f"Product {sku}"}]
    if dc_availability is not None:
        raw["attributes"] = [
            {
                "templateSlug": "logistics",
                "templateAttributes": [
                    {"fieldSlug": "dc_availability", "type": "text", "value": dc_availability},
                ],
            }
        ]
    return raw


def write_json(path: Path, records: object) -> Path:
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def write_jsonl(path: Path, records: list) -> Path:
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the developer's environment."""
    return Settings(PRELOAD_GLOBS="", LOAD_WORKERS=2, _env_file=None)


@pytest.fixture
def service(test_settings: Settings) -> CatalogService:
    return CatalogService(test_settings)


@pytest.fixture
def sample_raw_product() -> dict:
    """A realistic raw export record with every field shape."""
    return {
        "sku": "100-2001",
        "slug": "cordless-drill-18v",
        "externalRef": "EXT-9",
        "mpn": "DR18V",
        "upc_ean": "012345678905",
        "productType": "power-tool",
        "commodityType": "hardware",
        "status": "active",
        "name": [
            {"locale": "en", "value": "Cordless Drill 18V"},
            {"locale": "fr", "value": "Perceuse sans fil 18V"},
        ],
        "description": "Compact drill with two batteries",
        "attributes": [
            {
                "templateSlug": "general",
                "templateAttributes": [
                    {"fieldSlug": "color", "type": "text", "value": "red"},
                    {"fieldSlug": "weight_kg", "type": "number", "value": 1.6},
                ],
            },
            {
                "templateSlug": "logistics",
                "templateAttributes": [
                    {
                        "fieldSlug": "dc_availability",
                        "type": "text",
                        "value": json.dumps({"10": {"US": 1, "CA": 0}, "20": {"US": 0, "CA": 1}}),
                    },
                    {
                        "fieldSlug": "dc_specific",
                        "type": "text",
                        "value": json.dumps({"10": {"pack_qty": 6}}),
                    },
                ],
            },
        ],
    }
