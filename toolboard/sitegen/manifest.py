"""
Reading the extension manifest and normalising it into a ``Catalog``.

The manifest lists tools with optional ``i18n`` keys that point into the
English locale file (``messages.json``). Names and descriptions are
resolved through the locale first and fall back to the manifest's own
values, and finally to synthesized text, so one incomplete record never
fails the run. Missing or malformed input files do: they raise
``ManifestError``.
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..catalog.schemas import DEFAULT_CATEGORY_ORDER, LAST_ORDER, Catalog, Category, Tool
from ..errors import ManifestError
from ..textutil import to_title

MANIFEST_SOURCE = "extension/config/tools-manifest.json"

# Ids become file names and URL path segments
SAFE_ID = re.compile(r"[A-Za-z0-9_-]+")


def read_json(path: Path) -> Any:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise ManifestError(f"Unable to read {path}: {exc}") from exc
    except ValueError as exc:
        raise ManifestError(f"{path} is not valid JSON: {exc}") from exc


def load_manifest(path: Path) -> Dict[str, Any]:
    data = read_json(path)
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    if not isinstance(data.get("tools", []), list):
        raise ManifestError(f"{path}: 'tools' must be a list")
    if not isinstance(data.get("categories", {}), dict):
        raise ManifestError(f"{path}: 'categories' must be an object")
    return data


def load_locale(path: Path) -> Dict[str, Any]:
    data = read_json(path)
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")
    return data


def resolve_localized(locale: Dict[str, Any], key: Optional[str]) -> str:
    if not key or not isinstance(key, str):
        return ""
    entry = locale.get(key)
    if isinstance(entry, dict) and entry.get("message"):
        return str(entry["message"]).strip()
    return ""


def _i18n(tool: Dict[str, Any]) -> Dict[str, Any]:
    value = tool.get("i18n")
    return value if isinstance(value, dict) else {}


def resolve_tool_name(tool: Dict[str, Any], locale: Dict[str, Any]) -> str:
    """Locale ``i18n.name``, then manifest ``name``, then ``i18n.title`` / ``i18n.label``."""
    i18n = _i18n(tool)
    localized = resolve_localized(locale, i18n.get("name"))
    if localized:
        return localized
    manifest_name = str(tool.get("name") or "").strip()
    if manifest_name:
        return manifest_name
    for key in (i18n.get("title"), i18n.get("label")):
        localized = resolve_localized(locale, key)
        if localized:
            return localized
    return ""


def resolve_description(tool: Dict[str, Any], locale: Dict[str, Any], name: str = "") -> str:
    localized = resolve_localized(locale, _i18n(tool).get("description"))
    if localized:
        return localized
    description = str(tool.get("description") or "").strip()
    if description:
        return description
    return f"{name or tool.get('name') or ''} for {to_title(tool.get('category'))} workflows."


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _number(value: Any, default: int) -> Union[int, float]:
    # bool is an int subclass but never a display order
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def check_ids(tools: List[Tool], categories: Dict[str, Any]) -> None:
    """Reject ids that cannot be used as page names.

    Raises
    ------
    ManifestError
        When a tool id is missing, repeated, or contains anything besides
        letters, digits, ``-`` and ``_``; or when a category key is unsafe.
    """
    seen = set()
    for position, tool in enumerate(tools):
        if not tool.id:
            raise ManifestError(f"Tool #{position} ({tool.name or 'unnamed'}) has no id")
        if not SAFE_ID.fullmatch(tool.id):
            raise ManifestError(f"Tool id {tool.id!r} is not a safe page name")
        if tool.id in seen:
            raise ManifestError(f"Duplicate tool id {tool.id!r}")
        seen.add(tool.id)
    for cid in categories:
        if not SAFE_ID.fullmatch(str(cid)):
            raise ManifestError(f"Category id {cid!r} is not a safe page name")


def map_tool(raw: Dict[str, Any], categories: Dict[str, Any], locale: Dict[str, Any]) -> Tool:
    category_id = str(raw.get("category") or "")
    meta = categories.get(category_id)
    label = meta.get("name") if isinstance(meta, dict) else None
    name = resolve_tool_name(raw, locale) or str(raw.get("name") or "")
    return Tool(
        id=str(raw.get("id") or ""),
        name=name,
        category=category_id,
        category_label=str(label or to_title(category_id)),
        icon=str(raw.get("icon") or "tool"),
        description=resolve_description(raw, locale, name),
        tags=_string_list(raw.get("tags")),
        keywords=_string_list(raw.get("keywords")),
        permissions=_string_list(raw.get("permissions")),
        order=_number(raw.get("order"), LAST_ORDER),
        module=str(raw.get("module") or ""),
    )


def build_catalog(
    manifest: Dict[str, Any],
    locale: Dict[str, Any],
    generated_at: Optional[datetime] = None,
) -> Catalog:
    """Normalise a raw manifest into the catalog written to ``tools.json``.

    Tools are sorted by ``order`` and then by name (case-insensitive).
    Categories come only from the manifest's ``categories`` mapping, sorted
    by ``order`` with ties kept in manifest order; tools pointing at an
    undeclared category keep a title-cased label and are simply not
    counted anywhere.

    Raises ``ManifestError`` when a tool or category id cannot serve as a
    page name (see ``check_ids``).
    """
    categories = manifest.get("categories") or {}
    tools = [
        map_tool(raw, categories, locale)
        for raw in manifest.get("tools") or []
        if isinstance(raw, dict)
    ]
    check_ids(tools, categories)
    tools.sort(key=lambda t: (t.order, t.name.casefold()))

    resolved: List[Category] = []
    for cid, meta in categories.items():
        meta = meta if isinstance(meta, dict) else {}
        description = resolve_localized(locale, meta.get("description")) or meta.get("description") or ""
        resolved.append(
            Category(
                id=cid,
                name=str(meta.get("name") or to_title(cid)),
                description=str(description),
                order=_number(meta.get("order"), DEFAULT_CATEGORY_ORDER),
                count=sum(1 for t in tools if t.category == cid),
            )
        )
    resolved.sort(key=lambda c: c.order)

    stamp = (generated_at or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return Catalog(
        generated_at=stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        source=MANIFEST_SOURCE,
        tool_count=len(tools),
        categories=resolved,
        tools=tools,
    )
