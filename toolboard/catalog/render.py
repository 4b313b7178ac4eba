"""
Server-side rendering of the tool directory.

The directory page shows summary stats, the category menu, the six
largest categories as quick links, a result count with the active
category chip, one page of tool cards and the pagination controls. All
text is HTML-escaped. When the catalog failed to load the grid holds a
single "Unable to load tool data" card and the rest of the page still
renders around the empty catalog.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlencode

from ..textutil import escape_html, initials
from .filtering import filter_tools, paginate
from .schemas import ALL_CATEGORIES, Catalog, FilterState, PaginatedTools, Tool


ALL_CATEGORIES_LABEL = "All Categories"


def directory_href(state: FilterState, **overrides) -> str:
    params = {
        "q": state.query,
        "category": state.active_category,
        "page": state.page,
    }
    params.update(overrides)
    if params.get("category") == ALL_CATEGORIES:
        params.pop("category")
    if not params.get("q"):
        params.pop("q", None)
    if params.get("page") == 1:
        params.pop("page")
    query = urlencode(params)
    return f"/directory?{query}" if query else "/directory"


def render_tool_card(tool: Tool, position: int = 0) -> str:
    return (
        f'<article class="tool-card" tabindex="0" data-tool-id="{escape_html(tool.id)}"'
        f' style="--stagger: {position}">'
        f'<div class="tool-card__icon"><span class="tool-card__icon-label">'
        f"{escape_html(initials(tool.name))}</span></div>"
        f'<div class="tool-card__content">'
        f'<h3 class="tool-card__title">{escape_html(tool.name)}</h3>'
        f'<p class="tool-card__description">{escape_html(tool.description)}</p>'
        f'<span class="tool-card__category">{escape_html(tool.category_label or tool.category)}</span>'
        f"</div>"
        f'<a class="btn btn-secondary" href="/tools/{escape_html(tool.id)}/">Details</a>'
        f"</article>"
    )


def render_stats(catalog: Catalog) -> str:
    converters = sum(1 for t in catalog.tools if t.category == "converters")
    previewers = sum(1 for t in catalog.tools if t.category == "previewers")
    cards = [
        (len(catalog.tools), "Total tools"),
        (len(catalog.categories), "Categories"),
        (converters, "Converters"),
        (previewers, "Previewers"),
    ]
    body = "".join(
        f'<div class="stat-card"><h3>{value}</h3><p>{label}</p></div>' for value, label in cards
    )
    return f'<div id="stats-grid" class="stats-grid">{body}</div>'


def render_quick_categories(catalog: Catalog, state: FilterState, limit: int = 6) -> str:
    featured = sorted(catalog.categories, key=lambda c: c.count or 0, reverse=True)[:limit]
    links = "".join(
        f'<a class="quick-category" href="{escape_html(directory_href(state, category=c.id, page=1))}">'
        f"<span>{escape_html(c.name)}</span><strong>{c.count or 0}</strong></a>"
        for c in featured
    )
    return f'<div id="quick-categories" class="quick-categories">{links}</div>'


def render_category_menu(catalog: Catalog, state: FilterState) -> str:
    items = [(ALL_CATEGORIES, ALL_CATEGORIES_LABEL, len(catalog.tools))]
    items += [(c.id, c.name, c.count or 0) for c in catalog.categories]
    active = active_category_label(catalog, state)
    buttons = "".join(
        f'<a class="category-menu-item{" is-active" if cid == state.active_category else ""}"'
        f' data-category="{escape_html(cid)}"'
        f' href="{escape_html(directory_href(state, category=cid, page=1))}">'
        f"<span>{escape_html(name)} ({count})</span></a>"
        for cid, name, count in items
    )
    return (
        f'<div class="category-menu-wrapper">'
        f'<button id="category-menu-btn" type="button"><span>{escape_html(active)}</span></button>'
        f'<div id="category-menu" class="category-menu">{buttons}</div>'
        f"</div>"
    )


def active_category_label(catalog: Catalog, state: FilterState) -> str:
    if state.active_category == ALL_CATEGORIES:
        return ALL_CATEGORIES_LABEL
    category = catalog.category(state.active_category)
    return category.name if category else state.active_category


def render_search_feedback(catalog: Catalog, state: FilterState, shown: int) -> str:
    count = f'{shown} tool{"" if shown == 1 else "s"} shown'
    chips = ""
    if state.active_category != ALL_CATEGORIES:
        chips = (
            f'<a class="search-chip" href="{escape_html(directory_href(state, category=ALL_CATEGORIES, page=1))}">'
            f"{escape_html(active_category_label(catalog, state))}</a>"
        )
    return (
        f'<p id="search-result-count">{count}</p>'
        f'<div id="search-chips">{chips}</div>'
    )


def render_pagination(result: PaginatedTools, state: FilterState) -> str:
    hidden = " hidden" if result.total <= result.page_size else ""
    prev_disabled = "" if result.has_prev else " disabled"
    next_disabled = "" if result.has_next else " disabled"
    return (
        f'<nav id="tools-pagination" class="tools-pagination"{hidden}>'
        f'<form method="get" action="/directory">'
        f"{_hidden_filter_inputs(state)}"
        f'<button id="tools-prev-page" type="submit" name="page" value="{result.page - 1}"{prev_disabled}>Previous</button>'
        f'<span><span id="tools-current-page">{result.page}</span> / '
        f'<span id="tools-total-pages">{result.total_pages}</span></span>'
        f'<button id="tools-next-page" type="submit" name="page" value="{result.page + 1}"{next_disabled}>Next</button>'
        f"</form></nav>"
    )


def _hidden_filter_inputs(state: FilterState) -> str:
    fields = ""
    if state.query:
        fields += f'<input type="hidden" name="q" value="{escape_html(state.query)}">'
    if state.active_category != ALL_CATEGORIES:
        fields += f'<input type="hidden" name="category" value="{escape_html(state.active_category)}">'
    return fields


def render_tools_grid(result: PaginatedTools) -> str:
    if not result.items:
        body = (
            '<article class="tools-empty"><h3>No tools found</h3>'
            "<p>Try a different keyword or clear the category filter.</p></article>"
        )
    else:
        body = "".join(render_tool_card(t, i) for i, t in enumerate(result.items))
    return f'<div id="tools-grid" class="tools-grid">{body}</div>'


LOAD_FAILURE_CARD = (
    '<article class="tool-card"><div class="tool-card__content">'
    '<h3 class="tool-card__title">Unable to load tool data</h3>'
    '<p class="tool-card__description">Please refresh this page.</p>'
    "</div></article>"
)


def render_directory(
    catalog: Catalog,
    state: FilterState,
    error: Optional[str] = None,
) -> str:
    """Render the directory section for ``state``.

    ``state.page`` is clamped to the filtered result before rendering, so
    the page never reports a position past its last page.
    """
    filtered = filter_tools(catalog.tools, state.active_category, state.query)
    result = paginate(filtered, state.page, state.page_size)
    if result.page != state.page:
        state = state.model_copy(update={"page": result.page})

    parts: List[str] = [
        render_stats(catalog),
        render_quick_categories(catalog, state),
        '<form class="tools-search" method="get" action="/directory">'
        f'<input id="tool-search" type="search" name="q" value="{escape_html(state.query)}"'
        ' placeholder="Search tools">'
        + _hidden_filter_inputs(state.model_copy(update={"query": ""}))
        + "</form>",
        render_category_menu(catalog, state),
        render_search_feedback(catalog, state, len(filtered)),
    ]
    if error:
        parts.append(f'<div id="tools-grid" class="tools-grid">{LOAD_FAILURE_CARD}</div>')
    else:
        parts.append(render_tools_grid(result))
        parts.append(render_pagination(result, state))
    body = "\n".join(parts)
    return f'<section id="tools" class="tools-directory">\n{body}\n</section>\n'


def render_page(catalog: Catalog, state: FilterState, error: Optional[str] = None) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        "<title>Toolboard Tool Directory</title></head>\n"
        f'<body class="dark">\n{render_directory(catalog, state, error)}</body></html>\n'
    )
