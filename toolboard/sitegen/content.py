"""
Deterministic supplementary text for tool and category pages.

Every phrase is derived from the tool record and a fixed playbook entry
for its category. Where a variant has to be chosen, ``stable_index``
picks it from a seed built from the tool id, so regenerating the site
from the same manifest yields the same text byte for byte.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple, Sequence

from ..catalog.schemas import Category, Tool
from ..textutil import unique_list


class Playbook(NamedTuple):
    objective: str
    input: str
    output: str
    action: str


class Lead(NamedTuple):
    intro: str
    detail: str
    context: str


class FaqItem(NamedTuple):
    q: str
    a: str


CATEGORY_PLAYBOOK: Dict[str, Playbook] = {
    "inspect": Playbook(
        objective="audit and verify on-page implementation details",
        input="live page elements, markup, and style signals",
        output="diagnostic values you can reuse during QA or development",
        action="inspect target elements or metadata",
    ),
    "capture": Playbook(
        objective="collect assets and page content quickly",
        input="visible content or document sections from the active tab",
        output="captured media, files, or reusable extracts",
        action="capture content from the current page",
    ),
    "enhance": Playbook(
        objective="improve readability and workflow speed",
        input="the active page context and your interaction preferences",
        output="a cleaner, faster browsing experience",
        action="enhance readability or interaction behavior",
    ),
    "utilities": Playbook(
        objective="run practical web productivity tasks",
        input="mixed text, links, and page-level values",
        output="validated results for daily browser operations",
        action="run utility actions for diagnostics or productivity",
    ),
    "converters": Playbook(
        objective="transform source data into target formats accurately",
        input="structured or unstructured source strings and files",
        output="clean converted output ready for integration",
        action="convert source data into the target format",
    ),
    "previewers": Playbook(
        objective="preview structured content safely before delivery",
        input="raw payloads, configs, or formatted datasets",
        output="human-readable previews that reduce review mistakes",
        action="preview structured content safely and clearly",
    ),
    "ai": Playbook(
        objective="analyze and generate content with AI support",
        input="current page context plus your prompt intent",
        output="actionable summaries, drafts, or analytical guidance",
        action="analyze or generate output with your AI configuration",
    ),
}
DEFAULT_PLAYBOOK = "utilities"
RELATED_LIMIT = 4


def playbook_for(category_id: str) -> Playbook:
    return CATEGORY_PLAYBOOK.get(category_id) or CATEGORY_PLAYBOOK[DEFAULT_PLAYBOOK]


def _utf16_units(text: str) -> List[int]:
    data = text.encode("utf-16-le", errors="surrogatepass")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def stable_index(seed: str, mod: int) -> int:
    """Map ``seed`` to ``[0, mod)`` with a fixed 32-bit string hash.

    For each UTF-16 code unit ``u``: ``h = (h * 31 + u) mod 2**32``. The
    final ``h`` is read as a signed 32-bit integer and its absolute value
    is taken modulo ``mod``. This is the classic ``(h << 5) - h + u``
    hash, so indexes agree with any implementation of the same formula.
    """
    if mod <= 0:
        raise ValueError("mod must be positive")
    h = 0
    for unit in _utf16_units(str(seed or "")):
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % mod


def pick_by_seed(items: Sequence[str], seed: str, offset: int = 0) -> str:
    if not items:
        return ""
    return items[(stable_index(seed, len(items)) + offset) % len(items)]


def nice_list(items: Sequence[str]) -> str:
    """``["a", "b", "c"]`` -> ``"a, b, and c"``."""
    clean = unique_list(items)
    if not clean:
        return ""
    if len(clean) == 1:
        return clean[0]
    if len(clean) == 2:
        return f"{clean[0]} and {clean[1]}"
    return f"{', '.join(clean[:-1])}, and {clean[-1]}"


def primary_topics(tool: Tool) -> List[str]:
    return unique_list([*tool.keywords, *tool.tags])[:3]


def _sentence(text: str) -> str:
    return text if text.endswith(".") else f"{text}."


def build_lead(tool: Tool) -> Lead:
    playbook = playbook_for(tool.category)
    topic_text = nice_list(primary_topics(tool)) or tool.category_label.lower()
    variants = [
        f"{tool.name} is built to {playbook.objective} directly inside Chrome.",
        f"Use {tool.name} when your workflow depends on {topic_text} and fast browser execution.",
        f"{tool.name} brings {tool.category_label.lower()} capability into a single focused action flow.",
    ]
    return Lead(
        intro=pick_by_seed(variants, f"{tool.id}-lead-1"),
        detail=f"{_sentence(tool.description)} It works best when you want {playbook.output}.",
        context=(
            f"Typical input includes {playbook.input}, while the output is "
            f"optimized for teams handling {topic_text}."
        ),
    )


def make_use_cases(tool: Tool) -> List[str]:
    playbook = playbook_for(tool.category)
    topics = primary_topics(tool)
    defaults = [tool.category_label.lower(), "browser tasks", tool.name]
    a, b, c = (topics + defaults[len(topics):])[:3]
    return [
        f"Use {tool.name} to speed up {a} checks without switching tabs or external apps.",
        f"Apply {tool.name} in QA and support workflows when consistent {b} output is required.",
        f"Choose {tool.name} for repeatable operations where {c} accuracy matters before handoff.",
        f"{tool.name} is a strong fit when your team needs to {playbook.objective}.",
    ]


def make_how_to(tool: Tool) -> List[str]:
    playbook = playbook_for(tool.category)
    return [
        f"Open Toolboard from your Chrome toolbar and choose {tool.name}.",
        f"Prepare your source input and use {tool.name} to {playbook.action}.",
        "Validate the result, then continue with related Toolboard tools if your "
        "workflow needs additional steps.",
    ]


def permission_summary(tool: Tool) -> str:
    if not tool.permissions:
        return (
            "This tool uses the standard Toolboard runtime context and processes "
            "data locally in your browser session."
        )
    return (
        f"Permissions used by {tool.name}: {', '.join(tool.permissions)}. These "
        "permissions are scoped to tool execution and follow Toolboard's "
        "privacy-first model."
    )


def overlap_score(a: Tool, b: Tool) -> int:
    """Number of distinct lowercase tags/keywords ``a`` shares with ``b``."""
    set_a = {str(x).lower() for x in [*a.tags, *a.keywords]}
    set_b = {str(x).lower() for x in [*b.tags, *b.keywords]}
    return len(set_a & set_b)


def related_tools(tool: Tool, all_tools: Sequence[Tool], limit: int = RELATED_LIMIT) -> List[Tool]:
    """Same-category tools ranked by shared tags/keywords, then by name."""
    candidates = [t for t in all_tools if t.id != tool.id and t.category == tool.category]
    ranked = sorted(candidates, key=lambda t: (-overlap_score(tool, t), t.name.casefold()))
    return ranked[:limit]


def faq_for_tool(tool: Tool) -> List[FaqItem]:
    keyword = (tool.keywords or tool.tags or [tool.category_label.lower()])[0]
    playbook = playbook_for(tool.category)
    description = _sentence(tool.description)
    return [
        FaqItem(
            q=f"What does {tool.name} do in Toolboard?",
            a=(
                f"{tool.name} is designed to {playbook.objective}. {description} "
                f"It belongs to the {tool.category_label} category in Toolboard."
            ),
        ),
        FaqItem(
            q=f"When should I use {tool.name} instead of another tool?",
            a=(
                f"Use {tool.name} when your primary task is {keyword}. For broader "
                "workflows, combine it with related Toolboard tools listed on this page."
            ),
        ),
        FaqItem(
            q=f"Does {tool.name} store my data?",
            a=f"{tool.name} follows Toolboard's local-first behavior. {permission_summary(tool)}",
        ),
    ]


def faq_for_category(category: Category, tools: Sequence[Tool]) -> List[FaqItem]:
    top_tools = ", ".join(t.name for t in tools[:3])
    return [
        FaqItem(
            q=f"What is included in the {category.name} category?",
            a=(
                f"{category.name} includes {len(tools)} tools in Toolboard. Popular "
                f"entries include {top_tools or 'core tools for this category'}."
            ),
        ),
        FaqItem(
            q=f"Who should use {category.name} tools?",
            a=(
                f"{category.name} tools are designed for users who need reliable "
                "browser-native workflows with fast iteration and low setup overhead."
            ),
        ),
        FaqItem(
            q=f"How do I start with {category.name}?",
            a=(
                "Start with one focused tool from this page, validate its output, "
                "and chain related tools for larger workflows."
            ),
        ),
    ]
