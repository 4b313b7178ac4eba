"""
Site generator: manifest in, catalog JSON and static SEO pages out.

``generate()`` runs in two phases. ``render_site()`` reads the manifest
and locale file and renders every output document into memory; any
failure there raises before the site directory is touched. ``write_site()``
then removes stale tool/category pages and writes each document through
a temporary file and ``os.replace``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from ..config import Settings, get_settings
from . import pages
from .manifest import build_catalog, load_locale, load_manifest


logger = logging.getLogger(__name__)

SITE_DATA = "assets/data/tools.json"
TOOLS_DIR = "tools"
CATEGORIES_DIR = "categories"
TOOL_LINKS_INCLUDE = "_includes/tool-links.html"
CATEGORY_LINKS_INCLUDE = "_includes/category-links.html"
HOME_JSONLD_INCLUDE = "_includes/home-jsonld.html"
SITEMAP = "sitemap.xml"
ROBOTS = "robots.txt"


def render_site(settings: Settings, generated_at: Optional[datetime] = None) -> Dict[str, str]:
    """Render every generated document, keyed by path relative to the site root."""
    stamp = generated_at or datetime.now(timezone.utc)
    manifest = load_manifest(settings.manifest_file)
    locale = load_locale(settings.locale_file)
    catalog = build_catalog(manifest, locale, stamp)

    data = catalog.model_dump(by_alias=True)
    outputs: Dict[str, str] = {
        SITE_DATA: json.dumps(data, ensure_ascii=False, separators=(",", ":")) + "\n",
    }
    for tool in catalog.tools:
        outputs[f"{TOOLS_DIR}/{tool.id}.html"] = pages.build_tool_page(
            tool,
            catalog.tools,
            settings.site_url,
            settings.store_url,
            has_category_page=catalog.category(tool.category) is not None,
        )
    for category in catalog.categories:
        tools = [t for t in catalog.tools if t.category == category.id]
        outputs[f"{CATEGORIES_DIR}/{category.id}.html"] = pages.build_category_page(
            category, tools, settings.site_url
        )
    outputs[TOOL_LINKS_INCLUDE] = pages.build_tool_links_include(catalog)
    outputs[CATEGORY_LINKS_INCLUDE] = pages.build_category_links_include(catalog)
    outputs[HOME_JSONLD_INCLUDE] = pages.build_home_json_ld(catalog, settings.site_url)
    outputs[SITEMAP] = pages.build_sitemap(
        catalog, settings.site_url, stamp.astimezone(timezone.utc).date()
    )
    outputs[ROBOTS] = pages.build_robots(settings.site_url, settings.site_host)
    return outputs


def _atomic_write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def _remove_stale_pages(directory: Path, keep: set) -> int:
    removed = 0
    if not directory.is_dir():
        return removed
    for entry in directory.glob("*.html"):
        if entry.name not in keep:
            entry.unlink()
            removed += 1
    return removed


def write_site(site_root: Path, outputs: Dict[str, str]) -> None:
    for dirname in (TOOLS_DIR, CATEGORIES_DIR):
        keep = {Path(rel).name for rel in outputs if rel.startswith(f"{dirname}/")}
        removed = _remove_stale_pages(site_root / dirname, keep)
        if removed:
            logger.info("Removed %d stale page(s) from %s/", removed, dirname)
    for rel, text in sorted(outputs.items()):
        _atomic_write(site_root / rel, text)


def generate(settings: Optional[Settings] = None, generated_at: Optional[datetime] = None) -> Dict[str, str]:
    """Regenerate the site data and pages. Returns the rendered documents."""
    settings = settings or get_settings()
    outputs = render_site(settings, generated_at)
    write_site(settings.site_dir, outputs)
    tool_pages = sum(1 for rel in outputs if rel.startswith(f"{TOOLS_DIR}/"))
    logger.info("Synced %d tools with SEO-rich content.", tool_pages)
    return outputs
