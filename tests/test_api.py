"""
Tests for the HTTP and websocket surface of the directory service.
"""

import pytest
from fastapi.testclient import TestClient

from toolboard.catalog import store
from toolboard.catalog.render import render_directory
from toolboard.catalog.schemas import Catalog, FilterState
from toolboard.main import app


@pytest.fixture
def client(loaded_catalog):
    return TestClient(app)


class TestCatalogApi:
    """REST endpoints under /api/catalog."""

    def test_health(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "tools": 4, "categories": 3}

    def test_list_tools_defaults(self, client):
        body = client.get("/api/catalog/tools").json()
        assert body["total"] == 4
        assert body["page"] == 1
        assert body["page_size"] == 6
        assert [t["id"] for t in body["items"]] == [
            "json-formatter",
            "color-picker",
            "yaml-to-json",
            "page-summary",
        ]
        assert body["items"][0]["categoryLabel"] == "Converters"

    def test_list_tools_with_query_and_category(self, client):
        body = client.get("/api/catalog/tools", params={"q": "JSON", "category": "converters"}).json()
        assert [t["id"] for t in body["items"]] == ["json-formatter", "yaml-to-json"]

    def test_page_is_clamped(self, client):
        body = client.get("/api/catalog/tools", params={"page": 9, "page_size": 3}).json()
        assert body["page"] == 2
        assert body["total_pages"] == 2
        assert [t["id"] for t in body["items"]] == ["page-summary"]
        assert body["has_prev"] and not body["has_next"]

    def test_invalid_page_is_rejected(self, client):
        assert client.get("/api/catalog/tools", params={"page": 0}).status_code == 422

    def test_get_tool(self, client):
        assert client.get("/api/catalog/tools/color-picker").json()["name"] == "Color Picker"
        assert client.get("/api/catalog/tools/nope").status_code == 404

    def test_categories_in_display_order(self, client):
        body = client.get("/api/catalog/categories").json()
        assert [c["id"] for c in body] == ["inspect", "converters", "ai"]

    def test_catalog_data_uses_file_keys(self, client):
        body = client.get("/api/catalog/data").json()
        assert body["generatedAt"] == "2026-01-01T00:00:00.000Z"
        assert body["toolCount"] == 4
        assert "error" not in body


class TestDirectoryPage:
    """Server-rendered directory."""

    def test_renders_cards_and_feedback(self, client):
        html = client.get("/directory", params={"q": "json"}).text
        assert "2 tools shown" in html
        assert 'data-tool-id="json-formatter"' in html
        assert 'data-tool-id="color-picker"' not in html
        assert 'value="json"' in html

    def test_category_chip_and_menu_label(self, client):
        html = client.get("/directory", params={"category": "converters"}).text
        assert 'class="search-chip"' in html
        assert '<button id="category-menu-btn" type="button"><span>Converters</span>' in html

    def test_single_page_hides_pagination_and_disables_buttons(self, client):
        html = client.get("/directory").text
        assert '<nav id="tools-pagination" class="tools-pagination" hidden>' in html
        assert 'id="tools-prev-page" type="submit" name="page" value="0" disabled' in html
        assert 'id="tools-next-page" type="submit" name="page" value="2" disabled' in html

    def test_empty_result_message(self, client):
        html = client.get("/directory", params={"q": "nothing-matches"}).text
        assert "No tools found" in html
        assert "0 tools shown" in html

    def test_load_failure_shows_placeholder(self):
        store.set_catalog(Catalog(), error="Unable to load tools.json (500)")
        try:
            client = TestClient(app)
            html = client.get("/directory").text
            assert "Unable to load tool data" in html
            assert 'id="category-menu"' in html
            assert client.get("/").json()["status"] == "degraded"
        finally:
            store.set_catalog(None)


class TestRenderDirectory:
    """Pagination state reported by the rendered page."""

    def test_page_past_end_reports_last_page(self, fourteen_tools):
        catalog = Catalog(tools=fourteen_tools)
        html = render_directory(catalog, FilterState(page=4, page_size=6))
        assert '<span id="tools-current-page">3</span>' in html
        assert '<span id="tools-total-pages">3</span>' in html
        assert 'data-tool-id="tool-12"' in html
        assert 'data-tool-id="tool-13"' in html
        assert 'data-tool-id="tool-11"' not in html
        assert 'value="4" disabled' in html
        assert 'value="2">Previous' in html

    def test_names_are_escaped(self):
        from conftest import make_tool

        catalog = Catalog(tools=[make_tool("x", 'A <b> & "c"')])
        html = render_directory(catalog, FilterState())
        assert "A &lt;b&gt; &amp; &quot;c&quot;" in html
        assert "<b>" not in html


class TestLiveSearch:
    """Websocket live search with debounced queries."""

    def test_initial_results_follow_url_params(self, client):
        with client.websocket_connect("/api/catalog/search?category=converters") as ws:
            first = ws.receive_json()
            assert first["state"]["active_category"] == "converters"
            assert first["results"]["total"] == 2

    def test_rapid_queries_produce_one_reply(self, client):
        with client.websocket_connect("/api/catalog/search") as ws:
            ws.receive_json()
            for text in ["c", "co", "col", "colo", "color"]:
                ws.send_json({"type": "query", "value": text})
            reply = ws.receive_json()
            assert reply["state"]["query"] == "color"
            assert [t["id"] for t in reply["results"]["items"]] == ["color-picker"]

            ws.send_json({"type": "category", "value": "ai"})
            reply = ws.receive_json()
            assert reply["state"]["active_category"] == "ai"
            assert reply["state"]["query"] == "color"
            assert reply["results"]["total"] == 0

    def test_invalid_event_reports_error(self, client):
        with client.websocket_connect("/api/catalog/search") as ws:
            ws.receive_json()
            ws.send_json({"type": "explode"})
            assert "error" in ws.receive_json()
