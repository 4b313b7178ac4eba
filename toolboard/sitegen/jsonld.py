"""schema.org payloads embedded in the generated pages."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..catalog.schemas import Catalog, Category, Tool
from .content import FaqItem, nice_list

CONTEXT = "https://schema.org"
LOGO_PATH = "/assets/images/favicon-512x512.png"
SOURCE_REPO = "https://github.com/ademisler/toolboard"

Payload = Dict[str, Any]


def tool_url(site_url: str, tool: Tool) -> str:
    return f"{site_url}/tools/{tool.id}/"


def category_url(site_url: str, category_id: str) -> str:
    return f"{site_url}/categories/{category_id}/"


def faq_page(items: Sequence[FaqItem]) -> Payload:
    return {
        "@context": CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": item.q,
                "acceptedAnswer": {"@type": "Answer", "text": item.a},
            }
            for item in items
        ],
    }


def breadcrumb(site_url: str, trail: Sequence[Tuple[str, Optional[str]]]) -> Payload:
    """BreadcrumbList for ``trail``; a crumb with no URL is listed without ``item``."""
    crumbs = [("Home", f"{site_url}/"), ("Tools", f"{site_url}/#tools"), *trail]
    elements: List[Payload] = []
    for i, (name, url) in enumerate(crumbs, start=1):
        element: Payload = {"@type": "ListItem", "position": i, "name": name}
        if url:
            element["item"] = url
        elements.append(element)
    return {
        "@context": CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": elements,
    }


def item_list(site_url: str, name: str, tools: Sequence[Tool], ordered: bool = False) -> Payload:
    payload: Payload = {"@context": CONTEXT, "@type": "ItemList", "name": name}
    if ordered:
        payload["itemListOrder"] = "https://schema.org/ItemListOrderAscending"
    payload["numberOfItems"] = len(tools)
    payload["itemListElement"] = [
        {"@type": "ListItem", "position": i, "name": t.name, "url": tool_url(site_url, t)}
        for i, t in enumerate(tools, start=1)
    ]
    return payload


def free_offer() -> Payload:
    return {"@type": "Offer", "price": "0", "priceCurrency": "USD"}


def tool_payloads(
    tool: Tool,
    faq_items: Sequence[FaqItem],
    steps: Sequence[str],
    related: Sequence[Tool],
    site_url: str,
    store_url: str,
    has_category_page: bool = True,
) -> List[Payload]:
    """SoftwareApplication, FAQ, breadcrumb, WebPage, HowTo and related-tools payloads.

    Without a category page the category crumb carries no link.
    """
    url = tool_url(site_url, tool)
    software = {
        "@context": CONTEXT,
        "@type": "SoftwareApplication",
        "name": f"{tool.name} - Toolboard",
        "applicationCategory": "BrowserApplication",
        "operatingSystem": "Chrome",
        "description": tool.description,
        "url": url,
        "softwareVersion": "2.x",
        "applicationSubCategory": tool.category_label,
        "downloadUrl": store_url,
        "isAccessibleForFree": True,
        "inLanguage": "en-US",
        "publisher": {"@type": "Organization", "name": "Toolboard", "url": site_url},
        "offers": free_offer(),
        "featureList": [*tool.tags, *tool.keywords][:8],
    }
    web_page = {
        "@context": CONTEXT,
        "@type": "WebPage",
        "name": f"{tool.name} | Toolboard",
        "description": tool.description,
        "url": url,
        "inLanguage": "en-US",
        "isPartOf": {"@type": "WebSite", "name": "Toolboard", "url": site_url},
        "primaryImageOfPage": f"{site_url}{LOGO_PATH}",
    }
    how_to = {
        "@context": CONTEXT,
        "@type": "HowTo",
        "name": f"How to use {tool.name} in Toolboard",
        "description": f"Step-by-step workflow for {tool.name}.",
        "totalTime": "PT2M",
        "step": [
            {"@type": "HowToStep", "position": i, "name": f"Step {i}", "text": step}
            for i, step in enumerate(steps, start=1)
        ],
    }
    category_link = category_url(site_url, tool.category) if has_category_page else None
    trail = [
        (tool.category_label, category_link),
        (tool.name, url),
    ]
    return [
        software,
        faq_page(faq_items),
        breadcrumb(site_url, trail),
        web_page,
        how_to,
        item_list(site_url, f"Related tools for {tool.name}", related),
    ]


def category_payloads(
    category: Category,
    tools: Sequence[Tool],
    faq_items: Sequence[FaqItem],
    site_url: str,
) -> List[Payload]:
    """CollectionPage, ItemList, FAQ and breadcrumb payloads for a category page."""
    url = category_url(site_url, category.id)
    collection = {
        "@context": CONTEXT,
        "@type": "CollectionPage",
        "name": f"{category.name} Tools",
        "description": category.description or f"{category.name} tools in Toolboard.",
        "url": url,
    }
    return [
        collection,
        item_list(site_url, f"{category.name} Tools - Toolboard", tools, ordered=True),
        faq_page(faq_items),
        breadcrumb(site_url, [(category.name, url)]),
    ]


def home_payloads(catalog: Catalog, site_url: str) -> List[Payload]:
    tool_count = len(catalog.tools)
    areas = nice_list([c.name.lower() for c in catalog.categories]) or "browser workflows"
    website = {
        "@context": CONTEXT,
        "@type": "WebSite",
        "name": "Toolboard",
        "url": site_url,
        "description": f"Toolboard is a Chrome extension with {tool_count} tools across {areas}.",
        "potentialAction": {
            "@type": "SearchAction",
            "target": f"{site_url}/?q={{search_term_string}}",
            "query-input": "required name=search_term_string",
        },
    }
    software = {
        "@context": CONTEXT,
        "@type": "SoftwareApplication",
        "name": "Toolboard",
        "applicationCategory": "BrowserApplication",
        "operatingSystem": "Chrome",
        "softwareVersion": "2.x",
        "url": site_url,
        "offers": free_offer(),
        "featureList": [f"{c.name} ({c.count})" for c in catalog.categories],
    }
    organization = {
        "@context": CONTEXT,
        "@type": "Organization",
        "name": "Toolboard",
        "url": site_url,
        "logo": f"{site_url}{LOGO_PATH}",
        "sameAs": [SOURCE_REPO],
    }
    faq = faq_page(
        [
            FaqItem(
                "What is Toolboard?",
                f"Toolboard is a Chrome extension that provides {tool_count} tools for {areas} workflows.",
            ),
            FaqItem(
                "Are Toolboard tools free?",
                "Yes. Toolboard tools are available at no cost in the Chrome Web Store.",
            ),
            FaqItem(
                "How do I find a specific tool?",
                "Use the search and category filters on the homepage, or browse "
                "dedicated category and tool pages.",
            ),
        ]
    )
    collection = {
        "@context": CONTEXT,
        "@type": "CollectionPage",
        "name": "Toolboard Tool Directory",
        "description": "Browse all Toolboard tools and categories.",
        "url": site_url,
    }
    return [
        website,
        software,
        organization,
        item_list(site_url, "Toolboard Tools", catalog.tools),
        faq,
        collection,
    ]
