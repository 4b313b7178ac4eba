# toolboard/textutil.py
import json
import re
from typing import Any, Iterable, List, Optional


_SEPARATORS = re.compile(r"[-_]+")
_SPACES = re.compile(r"\s+")
_WORD_START = re.compile(r"\b\w")


def escape_html(value: Optional[Any]) -> str:
    """Entity-escape ``& < > " '`` for use in markup bodies and attributes."""
    return (
        str(value or "")
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def escape_yaml(value: Optional[Any]) -> str:
    """Backslash-escape double quotes for a double-quoted front-matter value."""
    return str(value or "").replace('"', '\\"')


def dump_json_ld(payload: Any) -> str:
    """Compact JSON for a ``<script type="application/ld+json">`` block.

    ``</`` is written as ``<\\/`` so no string value can terminate the
    enclosing script element.
    """
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return text.replace("</", "<\\/")


def to_title(value: Optional[Any]) -> str:
    """``"dev-tools_x"`` -> ``"Dev Tools X"``."""
    text = _SEPARATORS.sub(" ", str(value or ""))
    text = _SPACES.sub(" ", text).strip()
    return _WORD_START.sub(lambda m: m.group(0).upper(), text)


def unique_list(items: Optional[Iterable[Any]]) -> List[str]:
    """Strip items and drop blanks and case-insensitive duplicates, keeping order."""
    seen = set()
    out: List[str] = []
    for item in items or []:
        raw = str(item or "").strip()
        if not raw:
            continue
        key = raw.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(raw)
    return out


def initials(name: Optional[str], fallback: str = "T") -> str:
    """First letters of the first two words, upper-cased."""
    parts = [p for p in (name or "Tool").split() if p][:2]
    return "".join(p[0] for p in parts).upper() or fallback
