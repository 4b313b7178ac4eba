"""
Static documents written by the generator.

Tool and category pages are Jekyll documents: a double-quoted YAML front
matter block followed by JSON-LD script blocks and the page body. Free
text goes through ``escape_yaml`` in front matter, ``escape_html`` in
markup and ``dump_json_ld`` in structured data.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Sequence

from ..catalog.schemas import Catalog, Category, Tool
from ..textutil import dump_json_ld, escape_html, escape_yaml, unique_list
from . import content, jsonld


def front_matter(title: str, description: str, keywords: str, permalink: str, canonical: str) -> str:
    return (
        "---\n"
        "layout: default\n"
        f'title: "{escape_yaml(title)}"\n'
        f'description: "{escape_yaml(description)}"\n'
        f'keywords: "{escape_yaml(keywords)}"\n'
        'og_type: "article"\n'
        f"permalink: {permalink}\n"
        f'canonical: "{escape_yaml(canonical)}"\n'
        "---\n"
    )


def script_blocks(payloads: Iterable[dict]) -> str:
    return "\n".join(
        f'<script type="application/ld+json">\n{dump_json_ld(p)}\n</script>' for p in payloads
    )


def list_items(items: Sequence[str]) -> str:
    return "".join(f"<li>{escape_html(item)}</li>" for item in items)


def tool_links(links: Sequence[Tool]) -> str:
    if not links:
        return "<li>No close matches in this category yet.</li>"
    return "".join(
        f'<li><a href="/tools/{escape_html(t.id)}/">{escape_html(t.name)}</a> - '
        f"{escape_html(t.description)}</li>"
        for t in links
    )


def faq_markup(items: Sequence[content.FaqItem]) -> str:
    return "".join(f"<h3>{escape_html(i.q)}</h3><p>{escape_html(i.a)}</p>" for i in items)


def build_tool_page(
    tool: Tool,
    all_tools: Sequence[Tool],
    site_url: str,
    store_url: str,
    has_category_page: bool = True,
) -> str:
    keywords = ", ".join(
        unique_list([*tool.keywords, *tool.tags, tool.category, tool.category_label, tool.name])[:16]
    )
    title = f"{tool.name} Tool for Chrome | Toolboard"
    description = (
        f"{tool.name}: {tool.description} Learn use cases, workflow steps, related "
        "tools, and implementation details in Toolboard."
    )

    use_cases = content.make_use_cases(tool)
    steps = content.make_how_to(tool)
    faq_items = content.faq_for_tool(tool)
    related = content.related_tools(tool, all_tools)
    lead = content.build_lead(tool)
    payloads = jsonld.tool_payloads(
        tool, faq_items, steps, related, site_url, store_url, has_category_page
    )

    header = front_matter(
        title, description, keywords, f"/tools/{tool.id}/", jsonld.tool_url(site_url, tool)
    )
    name = escape_html(tool.name)
    label = escape_html(tool.category_label)
    if has_category_page:
        category_crumb = f'<a href="/categories/{escape_html(tool.category)}/">{label}</a>'
    else:
        category_crumb = f"<span>{label}</span>"
    tag_text = escape_html(", ".join(unique_list(tool.tags)) or "-")
    keyword_text = escape_html(", ".join(unique_list(tool.keywords)) or "-")
    module = escape_html(tool.module or "-")
    return f"""{header}
{script_blocks(payloads)}

<section class="tool-detail" data-tool-id="{escape_html(tool.id)}">
  <div class="container">
    <nav class="breadcrumb">
      <a href="/">Home</a>
      <span>›</span>
      <a href="/#tools">Tools</a>
      <span>›</span>
      {category_crumb}
      <span>›</span>
      <span class="is-current">{name}</span>
    </nav>

    <div class="tool-detail__header">
      <div id="tool-detail-icon" class="tool-card__icon" aria-hidden="true"></div>
      <div>
        <h1 id="tool-detail-title">{name}</h1>
        <p id="tool-detail-description">{escape_html(tool.description)}</p>
        <span id="tool-detail-category" class="tool-card__category">{label}</span>
      </div>
    </div>

    <section class="tool-detail__card tool-detail__lead">
      <h2>{name} Overview</h2>
      <p>{escape_html(lead.intro)}</p>
      <p>{escape_html(lead.detail)}</p>
      <p>{escape_html(lead.context)}</p>
    </section>

    <div class="tool-detail__grid">
      <article class="tool-detail__card">
        <h2>Primary Use Cases</h2>
        <ul>{list_items(use_cases)}</ul>
      </article>
      <article class="tool-detail__card">
        <h2>How to Use {name}</h2>
        <ol>{list_items(steps)}</ol>
      </article>
      <article class="tool-detail__card">
        <h2>Input and Output Profile</h2>
        <ul>
          <li><strong>Category:</strong> {label}</li>
          <li><strong>Tags:</strong> {tag_text}</li>
          <li><strong>Keywords:</strong> {keyword_text}</li>
          <li><strong>Module:</strong> <code>{module}</code></li>
        </ul>
      </article>
      <article class="tool-detail__card">
        <h2>Permissions and Privacy</h2>
        <p>{escape_html(content.permission_summary(tool))}</p>
      </article>
    </div>

    <section class="tool-detail__card" style="margin-top: 12px;">
      <h2>Related Tools in {label}</h2>
      <ul>{tool_links(related)}</ul>
    </section>

    <section class="tool-detail__card" style="margin-top: 12px;">
      <h2>FAQ</h2>
      <div class="tool-faq">
        {faq_markup(faq_items)}
      </div>
    </section>

    <div style="margin: 28px 0 48px; display:flex; gap:12px; flex-wrap:wrap;">
      <a class="btn btn-primary" href="{escape_html(store_url)}" target="_blank" rel="noopener">Install Toolboard</a>
      <a class="btn btn-secondary" href="/">Back to all tools</a>
    </div>
  </div>
</section>
"""


def build_category_page(category: Category, tools: Sequence[Tool], site_url: str) -> str:
    playbook = content.playbook_for(category.id)
    faq_items = content.faq_for_category(category, tools)
    payloads = jsonld.category_payloads(category, tools, faq_items, site_url)
    keyword_source = ", ".join(
        unique_list(
            [category.name, *[x for t in tools for x in (t.name, *t.tags, *t.keywords)]]
        )[:24]
    )
    title = f"{category.name} Tools for Chrome | Toolboard"
    description = (
        f"{category.name} tools in Toolboard: {len(tools)} workflows to "
        f"{playbook.objective}. Explore use cases, top tools, and implementation guidance."
    )
    name = escape_html(category.name)
    badge = escape_html((category.name or "C")[:2].upper())
    summary = escape_html(category.description or f"{category.name} workflows in Toolboard.")
    focus = f"This category is focused on teams that need to {playbook.objective}."
    profile = f"Inputs typically include {playbook.input}, and outputs are tuned for {playbook.output}."
    header = front_matter(
        title,
        description,
        keyword_source,
        f"/categories/{category.id}/",
        jsonld.category_url(site_url, category.id),
    )
    listing = tool_links(tools) if tools else ""
    return f"""{header}
{script_blocks(payloads)}

<section class="tool-detail">
  <div class="container">
    <nav class="breadcrumb">
      <a href="/">Home</a>
      <span>›</span>
      <a href="/#tools">Tools</a>
      <span>›</span>
      <span class="is-current">{name}</span>
    </nav>

    <div class="tool-detail__header">
      <div class="tool-card__icon" aria-hidden="true">
        <span class="tool-card__icon-label">{badge}</span>
      </div>
      <div>
        <h1>{name} Tools</h1>
        <p>{summary}</p>
        <span class="tool-card__category">{len(tools)} tools</span>
      </div>
    </div>

    <section class="tool-detail__card tool-detail__lead">
      <h2>Category Overview</h2>
      <p>{escape_html(focus)}</p>
      <p>{escape_html(profile)}</p>
      <p>Use these tools as standalone actions or combine them with related categories for full workflows.</p>
    </section>

    <section class="tool-detail__card" style="margin-top: 12px;">
      <h2>All {name} Tools</h2>
      <ul>
        {listing}
      </ul>
    </section>

    <section class="tool-detail__card" style="margin-top: 12px;">
      <h2>FAQ</h2>
      <div class="tool-faq">
        {faq_markup(faq_items)}
      </div>
    </section>
  </div>
</section>
"""


def build_tool_links_include(catalog: Catalog) -> str:
    groups: List[str] = []
    for category in catalog.categories:
        tools = [t for t in catalog.tools if t.category == category.id]
        items = "".join(
            f'<li><a href="/tools/{escape_html(t.id)}/">{escape_html(t.name)}</a></li>' for t in tools
        )
        groups.append(
            f'<article class="crawl-links__group"><h3>{escape_html(category.name)} '
            f"({len(tools)})</h3><ul>{items}</ul></article>"
        )
    links = "".join(groups)
    return f"""<section class="crawl-links" aria-label="Tool links for indexing">
  <h2>All Tool Pages</h2>
  <p>Direct links to every Toolboard tool page for discovery and indexing.</p>
  <div class="crawl-links__grid">
    {links}
  </div>
</section>
"""


def build_category_links_include(catalog: Catalog) -> str:
    links = "".join(
        f'<a class="quick-category" href="/categories/{escape_html(c.id)}/">'
        f"<span>{escape_html(c.name)}</span><strong>{c.count or 0}</strong></a>"
        for c in catalog.categories
    )
    return f"""<section class="crawl-links" aria-label="Category links for indexing">
  <h2>Browse by Category</h2>
  <p>Category landing pages with focused tool collections and guides.</p>
  <div class="quick-categories">
    {links}
  </div>
</section>
"""


def build_home_json_ld(catalog: Catalog, site_url: str) -> str:
    return script_blocks(jsonld.home_payloads(catalog, site_url)) + "\n"


def sitemap_urls(catalog: Catalog, site_url: str) -> List[str]:
    return [
        f"{site_url}/",
        *[jsonld.category_url(site_url, c.id) for c in catalog.categories],
        *[jsonld.tool_url(site_url, t) for t in catalog.tools],
    ]


def build_sitemap(catalog: Catalog, site_url: str, lastmod: date) -> str:
    root = f"{site_url}/"
    entries = "\n".join(
        "  <url>\n"
        f"    <loc>{escape_html(url)}</loc>\n"
        f"    <lastmod>{lastmod.isoformat()}</lastmod>\n"
        "    <changefreq>weekly</changefreq>\n"
        f"    <priority>{'1.0' if url == root else '0.8'}</priority>\n"
        "  </url>"
        for url in sitemap_urls(catalog, site_url)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}\n"
        "</urlset>\n"
    )


def build_robots(site_url: str, site_host: str) -> str:
    return f"User-agent: *\nAllow: /\n\nHost: {site_host}\nSitemap: {site_url}/sitemap.xml\n"
