"""
Pydantic schema definitions for the catalog module.

The ``Tool`` and ``Category`` models mirror the records stored in the
generated ``tools.json`` document, so field aliases follow the camelCase
keys of that file (``categoryLabel``, ``generatedAt``, ``toolCount``).
Both the alias and the Python attribute name are accepted on input.
``PaginatedTools`` bundles one page of filtered tools with pagination
metadata, and ``FilterState`` is the immutable value that drives the
directory view.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Literal

# Matches JavaScript's Number.MAX_SAFE_INTEGER so unordered tools sort last
LAST_ORDER = 9007199254740991
DEFAULT_CATEGORY_ORDER = 99
ALL_CATEGORIES = "all"


class Tool(BaseModel):
    """A single tool entry.

    ``order`` defaults to ``LAST_ORDER`` so that tools without an explicit
    display order are listed after every ordered tool. ``module`` is the
    extension module reference and may be empty.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    category: str
    category_label: str = Field(default="", alias="categoryLabel")
    icon: str = "tool"
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    permissions: List[str] = Field(default_factory=list)
    order: Union[int, float] = LAST_ORDER
    module: str = ""


class Category(BaseModel):
    """A tool category with its derived tool ``count``."""

    id: str
    name: str
    description: str = ""
    order: Union[int, float] = DEFAULT_CATEGORY_ORDER
    count: int = 0


class Catalog(BaseModel):
    """The full set of tools and categories loaded once per session."""

    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = Field(default="", alias="generatedAt")
    source: str = ""
    tool_count: int = Field(default=0, alias="toolCount")
    categories: List[Category] = Field(default_factory=list)
    tools: List[Tool] = Field(default_factory=list)

    def category(self, category_id: str):
        return next((c for c in self.categories if c.id == category_id), None)

    def tool(self, tool_id: str):
        return next((t for t in self.tools if t.id == tool_id), None)


class PaginatedTools(BaseModel):
    """A wrapper for paginated results returned from the ``/tools`` endpoint."""

    page: int
    page_size: int
    total: int
    total_pages: int
    has_prev: bool = False
    has_next: bool = False
    items: List[Tool]


class FilterState(BaseModel):
    """Active category, free-text query and current page of the directory view.

    The model is frozen: transitions in ``filtering`` return a new value
    instead of mutating the current one.
    """

    model_config = ConfigDict(frozen=True)

    active_category: str = ALL_CATEGORIES
    query: str = ""
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=6, ge=1)


EventType = Literal["query", "category", "next", "prev", "reset"]


class FilterEvent(BaseModel):
    """One UI interaction sent by a live-search client."""

    type: EventType
    value: Optional[str] = None
