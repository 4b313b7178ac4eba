"""
Catalog loader for the runtime service.

The catalog is the ``tools.json`` document written by the site
generator. It is loaded once per process from a local path or an
``http(s)`` URL and then treated as immutable. A failed load never
propagates to request handlers: ``get_catalog()`` logs the error,
remembers it for ``catalog_error()`` and serves an empty catalog so the
rest of the page keeps working.
"""

from __future__ import annotations

import json
import logging
import threading
import urllib.request
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from ..config import get_settings
from ..errors import CatalogLoadError
from .schemas import DEFAULT_CATEGORY_ORDER, Catalog, Category, Tool


logger = logging.getLogger(__name__)

_catalog: Optional[Catalog] = None
_load_error: Optional[str] = None
_lock = threading.Lock()


def _http_get_json(url: str) -> Any:
    """Perform an HTTP GET and return parsed JSON.

    Raises
    ------
    CatalogLoadError
        When the request fails, the status is not 200 or the body is not
        valid JSON.
    """
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(request, timeout=10) as response:
            if response.status != 200:
                logger.warning("Catalog request to %s returned status %s", url, response.status)
                raise CatalogLoadError(
                    f"Unable to load tools.json ({response.status})"
                )
            body = response.read().decode("utf-8", errors="ignore")
    except OSError as exc:
        raise CatalogLoadError(f"Unable to load tools.json: {exc}") from exc
    try:
        return json.loads(body)
    except ValueError as exc:
        raise CatalogLoadError(f"tools.json is not valid JSON: {exc}") from exc


def _read_json_file(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise CatalogLoadError(f"Unable to load {path}: {exc}") from exc
    except ValueError as exc:
        raise CatalogLoadError(f"{path} is not valid JSON: {exc}") from exc


def parse_catalog(data: Any) -> Catalog:
    """Build a ``Catalog`` from a decoded ``tools.json`` document.

    Non-list ``tools`` or ``categories`` values are treated as empty. A
    ``categories`` mapping (the manifest shape) is accepted as well as the
    resolved list shape; mapped entries get their ``id`` from the key and
    their ``count`` from the tools referencing them.
    """
    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog document must be a JSON object")

    raw_tools = data.get("tools")
    raw_categories = data.get("categories")
    try:
        tools: List[Tool] = [
            Tool.model_validate(t) for t in (raw_tools if isinstance(raw_tools, list) else [])
        ]
        categories: List[Category] = []
        if isinstance(raw_categories, list):
            categories = [Category.model_validate(c) for c in raw_categories]
        elif isinstance(raw_categories, dict):
            for cid, meta in raw_categories.items():
                meta = meta if isinstance(meta, dict) else {}
                order = meta.get("order")
                if isinstance(order, bool) or not isinstance(order, (int, float)):
                    order = DEFAULT_CATEGORY_ORDER
                categories.append(
                    Category(
                        id=str(cid),
                        name=str(meta.get("name") or cid),
                        description=str(meta.get("description") or ""),
                        order=order,
                        count=sum(1 for t in tools if t.category == cid),
                    )
                )
            categories.sort(key=lambda c: c.order)
    except ValidationError as exc:
        raise CatalogLoadError(f"Malformed catalog entry: {exc}") from exc

    return Catalog(
        generated_at=str(data.get("generatedAt") or ""),
        source=str(data.get("source") or ""),
        tool_count=len(tools),
        categories=categories,
        tools=tools,
    )


def load_catalog(source: Optional[str] = None) -> Catalog:
    """Load the catalog from ``source`` (path or URL).

    Parameters
    ----------
    source : Optional[str]
        Location of ``tools.json``. Defaults to the configured
        ``catalog_file``.

    Raises
    ------
    CatalogLoadError
        When the document cannot be fetched or parsed.
    """
    src = source or get_settings().catalog_file
    if src.startswith(("http://", "https://")):
        data = _http_get_json(src)
    else:
        data = _read_json_file(Path(src))
    catalog = parse_catalog(data)
    logger.info("Loaded %d tools in %d categories from %s",
                len(catalog.tools), len(catalog.categories), src)
    return catalog


def get_catalog() -> Catalog:
    """Return the process-wide catalog, loading it on first use."""
    global _catalog, _load_error
    if _catalog is not None:
        return _catalog
    with _lock:
        if _catalog is None:
            try:
                _catalog = load_catalog()
                _load_error = None
            except CatalogLoadError as exc:
                logger.error("Toolboard catalog load failed: %s", exc)
                _catalog = Catalog()
                _load_error = str(exc)
    return _catalog


def catalog_error() -> Optional[str]:
    """The error message of the last failed load, or ``None``."""
    return _load_error


def set_catalog(catalog: Optional[Catalog], error: Optional[str] = None) -> None:
    """Replace the cached catalog. ``None`` forces a reload on next use."""
    global _catalog, _load_error
    with _lock:
        _catalog = catalog
        _load_error = error
