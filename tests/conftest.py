"""Shared fixtures for the Toolboard tests."""

import json
from pathlib import Path

import pytest

from toolboard.catalog import store
from toolboard.catalog.schemas import Catalog, Category, Tool
from toolboard.config import Settings


def make_tool(tool_id, name=None, category="utilities", **fields) -> Tool:
    return Tool(
        id=tool_id,
        name=name or tool_id.replace("-", " ").title(),
        category=category,
        category_label=fields.pop("category_label", category.title()),
        **fields,
    )


@pytest.fixture
def fourteen_tools():
    """Fourteen converters, numbered so their order is easy to check."""
    return [make_tool(f"tool-{i:02d}", f"Tool {i:02d}", "converters") for i in range(14)]


@pytest.fixture
def sample_catalog():
    tools = [
        make_tool(
            "json-formatter",
            "JSON Formatter",
            "converters",
            category_label="Converters",
            description="Pretty-print and validate JSON payloads",
            tags=["json", "format"],
            keywords=["pretty print"],
        ),
        make_tool(
            "color-picker",
            "Color Picker",
            "inspect",
            category_label="Inspect",
            description="Pick colors from any element",
            tags=["css", "color"],
            keywords=["eyedropper"],
        ),
        make_tool(
            "yaml-to-json",
            "YAML to JSON",
            "converters",
            category_label="Converters",
            description="Convert YAML documents",
            tags=["yaml"],
            keywords=["config"],
        ),
        make_tool(
            "page-summary",
            "Page Summary",
            "ai",
            category_label="AI",
            description="Summarize the current page",
            tags=["summary"],
            keywords=["llm"],
        ),
    ]
    categories = [
        Category(id="inspect", name="Inspect", order=1, count=1),
        Category(id="converters", name="Converters", order=5, count=2),
        Category(id="ai", name="AI", order=7, count=1),
    ]
    return Catalog(
        generated_at="2026-01-01T00:00:00.000Z",
        source="test",
        tool_count=len(tools),
        categories=categories,
        tools=tools,
    )


@pytest.fixture
def loaded_catalog(sample_catalog):
    """Install ``sample_catalog`` as the process-wide catalog."""
    store.set_catalog(sample_catalog)
    yield sample_catalog
    store.set_catalog(None)


SAMPLE_MANIFEST = {
    "categories": {
        "converters": {"name": "Converters", "order": 5, "description": "cat_converters_desc"},
        "inspect": {"name": "Inspect", "order": 1, "description": "Look inside pages"},
    },
    "tools": [
        {
            "id": "json-formatter",
            "name": "JSON Formatter",
            "category": "converters",
            "tags": ["json", "format"],
            "keywords": ["pretty print"],
            "permissions": ["clipboardWrite"],
            "order": 2,
            "module": "tools/json-formatter.js",
            "i18n": {"description": "tool_json_desc"},
        },
        {
            "id": "color-picker",
            "name": "Color Picker",
            "category": "inspect",
            "tags": ["css", "color"],
            "order": 1,
        },
        {
            "id": "yaml-to-json",
            "name": "Manifest YAML",
            "category": "converters",
            "description": "Convert YAML documents",
            "tags": ["yaml", "json"],
            "i18n": {"name": "tool_yaml_name"},
        },
        {
            "id": "tab-notes",
            "name": "Tab Notes",
            "category": "productivity-extras",
            "tags": "not-a-list",
        },
    ],
}

SAMPLE_LOCALE = {
    "tool_json_desc": {"message": "Pretty-print and validate JSON payloads"},
    "tool_yaml_name": {"message": "YAML to JSON"},
    "cat_converters_desc": {"message": "Transform data between formats"},
}


@pytest.fixture
def site_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a manifest and locale file inside ``tmp_path``."""
    manifest = tmp_path / "extension" / "config" / "tools-manifest.json"
    locale = tmp_path / "extension" / "_locales" / "en" / "messages.json"
    manifest.parent.mkdir(parents=True)
    locale.parent.mkdir(parents=True)
    manifest.write_text(json.dumps(SAMPLE_MANIFEST), encoding="utf-8")
    locale.write_text(json.dumps(SAMPLE_LOCALE), encoding="utf-8")
    return Settings(repo_root=tmp_path)
