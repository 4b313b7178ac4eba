"""
Build-time generator for the Toolboard website.

Reads the extension's tools manifest and English locale file, writes the
``tools.json`` catalog consumed by the directory service, and renders
static per-tool and per-category pages, link includes, home-page
structured data, the sitemap and robots.txt.
"""

from .generator import generate, render_site  # noqa: F401
