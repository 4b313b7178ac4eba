# toolboard/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import HTMLResponse

from . import __version__
from .catalog import catalog_router
from .catalog.filtering import from_params
from .catalog.render import render_page
from .catalog.store import catalog_error, get_catalog
from .config import get_settings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    catalog = get_catalog()
    logger.info("Toolboard directory starting with %d tools", len(catalog.tools))
    yield


app = FastAPI(
    title="Toolboard Directory",
    description=(
        "Catalog service for the Toolboard website: search, category "
        "filtering and pagination over the generated tools.json."
    ),
    version=__version__,
    lifespan=lifespan,
)
app.include_router(catalog_router)


@app.get("/")
def health_check():
    catalog = get_catalog()
    error = catalog_error()
    return {
        "status": "degraded" if error else "ok",
        "tools": len(catalog.tools),
        "categories": len(catalog.categories),
    }


@app.get("/directory", response_class=HTMLResponse)
def directory_page(
    q: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1),
):
    state = from_params(q=q, category=category, page=page, page_size=get_settings().page_size)
    return HTMLResponse(render_page(get_catalog(), state, catalog_error()))
