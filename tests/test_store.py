"""
Tests for the catalog loader.
"""

import json

import pytest

from toolboard.catalog import store
from toolboard.catalog.schemas import LAST_ORDER
from toolboard.errors import CatalogLoadError


class TestParseCatalog:
    """Decoding tools.json documents."""

    def test_resolved_shape(self):
        catalog = store.parse_catalog(
            {
                "generatedAt": "2026-01-01T00:00:00.000Z",
                "tools": [
                    {"id": "a", "name": "A", "category": "ai", "categoryLabel": "AI"},
                ],
                "categories": [{"id": "ai", "name": "AI", "order": 7, "count": 1}],
            }
        )
        assert catalog.tools[0].category_label == "AI"
        assert catalog.tools[0].order == LAST_ORDER
        assert catalog.categories[0].count == 1
        assert catalog.tool_count == 1

    def test_mapping_shape_derives_counts(self):
        catalog = store.parse_catalog(
            {
                "tools": [
                    {"id": "a", "name": "A", "category": "ai"},
                    {"id": "b", "name": "B", "category": "ai"},
                ],
                "categories": {"ai": {"name": "AI", "order": 2}, "inspect": {"order": 1}},
            }
        )
        assert [c.id for c in catalog.categories] == ["inspect", "ai"]
        assert catalog.category("ai").count == 2
        assert catalog.category("inspect").name == "inspect"

    def test_fractional_orders_are_accepted(self):
        catalog = store.parse_catalog(
            {
                "tools": [{"id": "a", "name": "A", "category": "ai", "order": 1.5}],
                "categories": {"ai": {"name": "AI", "order": 2.5}},
            }
        )
        assert catalog.tools[0].order == 1.5
        assert catalog.categories[0].order == 2.5

    def test_non_list_tools_become_empty(self):
        catalog = store.parse_catalog({"tools": "nope", "categories": None})
        assert catalog.tools == []
        assert catalog.categories == []

    def test_non_object_document_is_rejected(self):
        with pytest.raises(CatalogLoadError):
            store.parse_catalog([1, 2, 3])

    def test_malformed_entry_is_rejected(self):
        with pytest.raises(CatalogLoadError):
            store.parse_catalog({"tools": [{"name": "no id"}]})


class TestLoading:
    """Load-once behaviour and failure fallback."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tools.json"
        path.write_text(json.dumps({"tools": [{"id": "a", "name": "A", "category": "ai"}]}))
        catalog = store.load_catalog(str(path))
        assert [t.id for t in catalog.tools] == ["a"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            store.load_catalog(str(tmp_path / "missing.json"))

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "tools.json"
        path.write_text("{not json")
        with pytest.raises(CatalogLoadError):
            store.load_catalog(str(path))

    def test_get_catalog_falls_back_to_empty_on_failure(self, tmp_path, monkeypatch):
        def failing_load(source=None):
            raise CatalogLoadError("Unable to load tools.json (404)")

        monkeypatch.setattr(store, "load_catalog", failing_load)
        store.set_catalog(None)
        try:
            catalog = store.get_catalog()
            assert catalog.tools == []
            assert store.catalog_error() == "Unable to load tools.json (404)"
        finally:
            store.set_catalog(None)

    def test_get_catalog_loads_once(self, monkeypatch, sample_catalog):
        calls = []

        def counting_load(source=None):
            calls.append(source)
            return sample_catalog

        monkeypatch.setattr(store, "load_catalog", counting_load)
        store.set_catalog(None)
        try:
            assert store.get_catalog() is sample_catalog
            assert store.get_catalog() is sample_catalog
            assert len(calls) == 1
            assert store.catalog_error() is None
        finally:
            store.set_catalog(None)
