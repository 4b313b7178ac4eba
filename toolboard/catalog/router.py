"""
Route definitions for the catalog API.

Endpoints under /api/catalog:
- GET  /tools            : list tools with search, category filter and pagination
- GET  /tools/{tool_id}  : get one tool
- GET  /categories       : categories in display order
- GET  /data             : the whole catalog document (tools.json shape)
- WS   /search           : live search with debounced query input
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ..config import get_settings
from .debounce import Debouncer
from .filtering import filter_tools, from_params, reduce, select
from .schemas import (
    ALL_CATEGORIES,
    Catalog,
    Category,
    FilterEvent,
    FilterState,
    PaginatedTools,
    Tool,
)
from .store import catalog_error, get_catalog


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/tools", response_model=PaginatedTools)
def list_tools(
    q: Optional[str] = Query(default=None, description="Free-text search"),
    category: str = Query(default=ALL_CATEGORIES, description="Category id or 'all'"),
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    page_size: Optional[int] = Query(default=None, ge=1, le=200, description="Page size"),
) -> PaginatedTools:
    """
    Returns a paginated list of tools.

    Filtering keeps catalog order; the requested page is clamped to the
    last page of the filtered result.
    """
    state = from_params(
        q=q,
        category=category,
        page=page,
        page_size=page_size or get_settings().page_size,
    )
    return select(get_catalog().tools, state)


@router.get("/tools/{tool_id}", response_model=Tool)
def get_tool(tool_id: str) -> Tool:
    tool = get_catalog().tool(tool_id)
    if tool is None:
        raise HTTPException(status_code=404, detail="Tool not found")
    return tool


@router.get("/categories", response_model=List[Category])
def list_categories() -> List[Category]:
    return get_catalog().categories


@router.get("/data")
def catalog_data() -> Dict[str, Any]:
    """The catalog in its ``tools.json`` shape, plus any load error."""
    catalog: Catalog = get_catalog()
    data = catalog.model_dump(by_alias=True)
    error = catalog_error()
    if error:
        data["error"] = error
    return data


# ---------------------------------------------------------------------------
# Live search
#
# Each websocket client owns a FilterState. Query events only update the
# state and (re)arm the debouncer; the filter cycle runs when it fires and
# reads the latest state. Category and page events are applied and
# answered immediately, cancelling any pending query fire since the reply
# already reflects the latest query. A reply still being sent by an
# earlier fire goes out first.


class SearchSession:
    """Filter state and debounced replies for one live-search client."""

    def __init__(self, websocket: WebSocket, catalog: Catalog, state: FilterState, delay: float):
        self.websocket = websocket
        self.catalog = catalog
        self.state = state
        self.debouncer = Debouncer(delay, self.send_results)

    def filtered_total(self) -> int:
        return len(filter_tools(self.catalog.tools, self.state.active_category, self.state.query))

    async def send_results(self) -> None:
        results = select(self.catalog.tools, self.state)
        await self.websocket.send_json(
            {
                "state": self.state.model_dump(),
                "results": results.model_dump(by_alias=True),
            }
        )

    async def handle(self, event: FilterEvent) -> None:
        self.state = reduce(self.state, event, self.filtered_total())
        if event.type == "query":
            self.debouncer.schedule()
        else:
            self.debouncer.cancel()
            await self.debouncer.flush()
            await self.send_results()


@router.websocket("/search")
async def live_search(websocket: WebSocket) -> None:
    settings = get_settings()
    await websocket.accept()
    params = websocket.query_params
    state = from_params(
        q=params.get("q"),
        category=params.get("category"),
        page_size=settings.page_size,
    )
    session = SearchSession(websocket, get_catalog(), state, settings.search_debounce)
    await session.send_results()
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                event = FilterEvent.model_validate_json(raw)
            except ValidationError as exc:
                await websocket.send_json({"error": exc.errors(include_url=False)[0]["msg"]})
                continue
            await session.handle(event)
    except WebSocketDisconnect:
        logger.debug("Live search client disconnected")
    finally:
        session.debouncer.close()
