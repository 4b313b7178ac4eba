"""
Catalog package for the Toolboard directory service.

This package loads the ``tools.json`` catalog produced by the site
generator and exposes it through a REST API and a server-rendered
directory page. The API supports free-text search, category filtering
and pagination over an immutable filter state, plus a websocket live
search whose query input is debounced.
"""

from .router import router as catalog_router  # noqa: F401
