"""
Filtering, pagination and filter-state transitions for the directory.

Everything in this module is pure: functions take the catalog tools and a
``FilterState`` and return new values. State changes happen only through
the transition helpers (``with_query``, ``with_category``, ``next_page``,
``prev_page``) or the ``reduce`` dispatcher that the live search uses.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .schemas import ALL_CATEGORIES, FilterEvent, FilterState, PaginatedTools, Tool


def _normalize(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def search_blob(tool: Tool) -> str:
    """Return the lowercase text a query is matched against.

    The blob joins name, description, category id, category label, tags
    and keywords with single spaces.
    """
    parts = [
        tool.name,
        tool.description,
        tool.category,
        tool.category_label,
        *(tool.tags or []),
        *(tool.keywords or []),
    ]
    return " ".join(parts).lower()


def filter_tools(
    tools: Sequence[Tool],
    category: Optional[str] = ALL_CATEGORIES,
    query: Optional[str] = "",
) -> List[Tool]:
    """Select the tools matching a category and a free-text query.

    Parameters
    ----------
    tools : Sequence[Tool]
        The catalog tools, in catalog order.
    category : Optional[str]
        A category identifier, or ``"all"`` (or empty) to disable the
        category filter. Category matching is exact.
    query : Optional[str]
        Free-text query. It is stripped and lowercased, then matched as a
        substring of ``search_blob(tool)``. An empty query matches
        everything.

    Returns
    -------
    List[Tool]
        Matching tools in their original order. No relevance ranking is
        applied.
    """
    nq = _normalize(query)
    active = category or ALL_CATEGORIES
    items: List[Tool] = []
    for tool in tools:
        if active != ALL_CATEGORIES and tool.category != active:
            continue
        if nq and nq not in search_blob(tool):
            continue
        items.append(tool)
    return items


def total_pages_for(total: int, page_size: int) -> int:
    size = max(1, page_size)
    return max(1, (total + size - 1) // size)


def clamp_page(page: int, total: int, page_size: int) -> int:
    return min(max(1, page), total_pages_for(total, page_size))


def paginate(items: Sequence[Tool], page: int = 1, page_size: int = 6) -> PaginatedTools:
    """Slice one page out of a filtered sequence.

    The requested page is clamped into ``[1, total_pages]`` before the
    slice is taken, so a result set that shrank under the current page
    yields its last page rather than an empty one.
    """
    size = max(1, page_size)
    total = len(items)
    total_pages = total_pages_for(total, size)
    current = clamp_page(page, total, size)

    start = (current - 1) * size
    end = start + size
    return PaginatedTools(
        page=current,
        page_size=size,
        total=total,
        total_pages=total_pages,
        has_prev=current > 1,
        has_next=current < total_pages,
        items=list(items[start:end]),
    )


def select(tools: Sequence[Tool], state: FilterState) -> PaginatedTools:
    """Filter then paginate ``tools`` according to ``state``."""
    filtered = filter_tools(tools, state.active_category, state.query)
    return paginate(filtered, state.page, state.page_size)


# ---------------------------------------------------------------------------
# State transitions


def from_params(
    q: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    page_size: int = 6,
) -> FilterState:
    """Seed a filter state from the ``q`` and ``category`` URL parameters."""
    return FilterState(
        active_category=category or ALL_CATEGORIES,
        query=q or "",
        page=max(1, page),
        page_size=page_size,
    )


def with_query(state: FilterState, query: str) -> FilterState:
    return state.model_copy(update={"query": query or "", "page": 1})


def with_category(state: FilterState, category: Optional[str]) -> FilterState:
    return state.model_copy(
        update={"active_category": category or ALL_CATEGORIES, "page": 1}
    )


def next_page(state: FilterState, total: int) -> FilterState:
    """Advance one page; the state is returned unchanged on the last page."""
    current = clamp_page(state.page, total, state.page_size)
    if current >= total_pages_for(total, state.page_size):
        return state if current == state.page else state.model_copy(update={"page": current})
    return state.model_copy(update={"page": current + 1})


def prev_page(state: FilterState, total: int) -> FilterState:
    current = clamp_page(state.page, total, state.page_size)
    if current <= 1:
        return state if current == state.page else state.model_copy(update={"page": current})
    return state.model_copy(update={"page": current - 1})


def reduce(state: FilterState, event: FilterEvent, total: int) -> FilterState:
    """Apply one UI event to ``state``.

    ``total`` is the size of the currently filtered result, needed to bound
    page navigation.
    """
    kind = event.type
    if kind == "query":
        return with_query(state, event.value or "")
    if kind == "category":
        return with_category(state, event.value)
    if kind == "next":
        return next_page(state, total)
    if kind == "prev":
        return prev_page(state, total)
    if kind == "reset":
        return FilterState(page_size=state.page_size)
    raise ValueError(f"Unknown filter event type: {kind!r}")
