"""Tests for CatalogService (operations exposed to collaborators)."""

import json
from pathlib import Path

import pytest

from conftest import make_raw_product, write_json, write_jsonl
from dealer_catalog.conf.config import Settings
from dealer_catalog.core.exceptions import CatalogParseError
from dealer_catalog.core.models import SearchCriteria
from dealer_catalog.core.validation import ValidationError
from dealer_catalog.services.catalog.service import CatalogService


@pytest.fixture
def loaded(service: CatalogService, tmp_path: Path) -> CatalogService:
    write_json(
        tmp_path / "products-acme-1.json",
        [
            make_raw_product("A-1", dc_availability=json.dumps({"10": {"US": 1, "CA": 0}})),
            make_raw_product("A-2", status=None, dc_availability={"10": {"US": 0}, "20": {"CA": 1}}),
        ],
    )
    write_jsonl(
        tmp_path / "products-bolt-1.jsonl",
        [make_raw_product("B-1", status="discontinued"), make_raw_product("A-1", status="active")],
    )
    write_json(tmp_path / "misc.json", [make_raw_product("M-1")])
    service.load_files([str(tmp_path / "*.json"), str(tmp_path / "*.jsonl")])
    return service


class TestLoadFiles:
    """load_files / clear."""

    def test_returns_count(self, service, tmp_path: Path):
        write_json(tmp_path / "a.json", [make_raw_product("A"), make_raw_product("B")])

        assert service.load_files([str(tmp_path / "a.json")]) == 2

    def test_clear_before_load(self, loaded, tmp_path: Path):
        count = loaded.load_files([str(tmp_path / "misc.json")], clear_before_load=True)

        assert count == 1
        assert loaded.get_catalog_summary().total_products == 1

    def test_empty_paths_rejected(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service.load_files([])

        assert exc_info.value.field == "paths"

    def test_single_string_path_rejected(self, service, tmp_path: Path):
        write_json(tmp_path / "a.json", [make_raw_product("A")])

        with pytest.raises(ValidationError) as exc_info:
            service.load_files(str(tmp_path / "a.json"))

        assert exc_info.value.field == "paths"
        assert len(service.store) == 0

    def test_parse_failure_propagates(self, service, tmp_path: Path):
        (tmp_path / "bad.json").write_text("[", encoding="utf-8")

        with pytest.raises(CatalogParseError):
            service.load_files([str(tmp_path / "bad.json")])

    def test_clear(self, loaded):
        loaded.clear()

        assert loaded.list_dealers() == []
        assert loaded.list_loaded_files() == {}
        assert loaded.search().total == 0

    def test_index_consistency(self, loaded):
        snapshot = loaded.store.snapshot()
        total = sum(len(items) for items in snapshot.products_by_dealer.values())

        assert total == len(snapshot.products) == 5


class TestDealers:
    """Dealer-level queries."""

    def test_list_dealers_in_load_order(self, loaded):
        assert loaded.list_dealers() == ["unknown", "acme", "bolt"]

    def test_dealer_summary(self, loaded, tmp_path: Path):
        summary = loaded.get_dealer_summary("acme")

        assert summary.product_count == 2
        assert summary.statuses == {"active": 1, "unknown": 1}
        assert summary.distribution_centers == ["10", "20"]
        assert summary.files == [str(tmp_path / "products-acme-1.json")]
        assert summary.to_dict()["productCount"] == 2

    def test_unknown_dealer_summary_is_empty(self, loaded):
        summary = loaded.get_dealer_summary("nobody")

        assert summary.product_count == 0
        assert summary.statuses == {}
        assert summary.files == []

    def test_dealer_product_count(self, loaded):
        count = loaded.get_dealer_product_count("bolt")

        assert count.count == 2
        assert count.to_dict() == {"dealerId": "bolt", "count": 2}
        assert loaded.get_dealer_product_count("nobody").count == 0

    def test_list_loaded_files(self, loaded, tmp_path: Path):
        files = loaded.list_loaded_files()

        assert files["bolt"] == [str(tmp_path / "products-bolt-1.jsonl")]
        assert files["unknown"] == [str(tmp_path / "misc.json")]


class TestProductLookup:
    """get_product_by_sku."""

    def test_first_match_by_load_order(self, loaded):
        product = loaded.get_product_by_sku("A-1")

        assert product is not None
        assert product.dealer_id == "acme"

    def test_scoped_to_dealer(self, loaded):
        product = loaded.get_product_by_sku("A-1", dealer_id="bolt")

        assert product is not None
        assert product.dealer_id == "bolt"

    def test_missing(self, loaded):
        assert loaded.get_product_by_sku("NOPE") is None
        assert loaded.get_product_by_sku("B-1", dealer_id="acme") is None


class TestSearch:
    """search with criteria and pagination."""

    def test_defaults(self, loaded):
        result = loaded.search()

        assert result.total == 5
        assert result.offset == 0
        assert result.limit == 50
        assert len(result.results) == 5

    def test_accepts_dict_criteria_with_export_names(self, loaded):
        result = loaded.search({"dealerId": "acme", "dcCode": "10", "region": "US"})

        assert [p.sku for p in result.results] == ["A-1"]

    def test_accepts_model_criteria(self, loaded):
        result = loaded.search(SearchCriteria(region="CA"))

        assert [p.sku for p in result.results] == ["A-2"]

    def test_unknown_criterion_rejected(self, loaded):
        with pytest.raises(ValidationError) as exc_info:
            loaded.search({"colour": "red"})

        assert exc_info.value.field == "colour"

    @pytest.mark.parametrize(
        "offset,limit,field",
        [(-1, 10, "offset"), (0, 0, "limit"), (0, 201, "limit")],
    )
    def test_invalid_page_rejected(self, loaded, offset, limit, field):
        with pytest.raises(ValidationError) as exc_info:
            loaded.search(offset=offset, limit=limit)

        assert exc_info.value.field == field

    def test_pagination_reports_total(self, service, tmp_path: Path):
        write_jsonl(tmp_path / "many.jsonl", [make_raw_product(f"S{i:03d}") for i in range(120)])
        service.load_files([str(tmp_path / "many.jsonl")])

        result = service.search({"query": "product"}, offset=100, limit=50)

        assert result.total == 120
        assert len(result.results) == 20
        assert result.results[0].sku == "S100"

    def test_to_dict(self, loaded):
        data = loaded.search({"sku": "B-1"}).to_dict()

        assert data["total"] == 1
        assert data["results"][0]["sku"] == "B-1"
        assert data["results"][0]["dealerId"] == "bolt"


class TestSummaries:
    """Catalog-wide aggregations."""

    def test_distribution_center_counts(self, loaded):
        assert loaded.get_distribution_center_counts() == {"10": 2, "20": 1}
        assert loaded.get_distribution_center_counts("acme") == {"10": 2, "20": 1}
        assert loaded.get_distribution_center_counts("bolt") == {}

    def test_catalog_summary(self, loaded):
        summary = loaded.get_catalog_summary()

        assert summary.total_products == 5
        assert summary.by_dealer == {"unknown": 1, "acme": 2, "bolt": 2}
        assert summary.by_status == {"active": 3, "unknown": 1, "discontinued": 1}
        assert summary.by_dc == {"10": 2, "20": 1}
        assert summary.sample_skus == ["M-1", "A-1", "A-2", "B-1", "A-1"]

    def test_sample_skus_are_capped(self, tmp_path: Path):
        service = CatalogService(Settings(PRELOAD_GLOBS="", SAMPLE_SKU_COUNT=2, _env_file=None))
        write_json(tmp_path / "a.json", [make_raw_product(f"S{i}") for i in range(5)])
        service.load_files([str(tmp_path / "a.json")])

        assert service.get_catalog_summary().sample_skus == ["S0", "S1"]


class TestPreload:
    """preload from PRELOAD_GLOBS."""

    def test_preload_loads_configured_globs(self, tmp_path: Path):
        write_json(tmp_path / "products-acme-1.json", [make_raw_product("A")])
        service = CatalogService(Settings(PRELOAD_GLOBS=f"{tmp_path}/*.json, ", _env_file=None))

        assert service.preload() == 1
        assert service.list_dealers() == ["acme"]

    def test_preload_failure_is_logged_not_raised(self, tmp_path: Path, caplog):
        (tmp_path / "bad.json").write_text("{", encoding="utf-8")
        service = CatalogService(Settings(PRELOAD_GLOBS=str(tmp_path / "*.json"), _env_file=None))

        assert service.preload() == 0
        assert "Preload failed" in caplog.text

    def test_preload_of_deeply_nested_file_is_logged_not_raised(self, tmp_path: Path, caplog):
        (tmp_path / "deep.json").write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")
        service = CatalogService(Settings(PRELOAD_GLOBS=str(tmp_path / "*.json"), _env_file=None))

        assert service.preload() == 0
        assert "Preload failed" in caplog.text
