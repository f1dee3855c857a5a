"""Internal linking of known product and category names in article prose."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .shortcodes import shortcode_spans

SKIP_TAGS = ("a", "h1", "h2", "h3", "h4", "h5", "h6", "code", "pre", "script", "style")

# Attribute values may contain ">", so tag bodies skip over quoted strings
TAG_BODY = r"""(?:[^>"']|"[^"]*"|'[^']*')*"""

SKIP_TAGS_RE = re.compile(
    r"<(%s)\b%s>.*?</\1\s*>" % ("|".join(SKIP_TAGS), TAG_BODY),
    re.IGNORECASE | re.DOTALL,
)
ANCHOR_RE = re.compile(r"<a\s%s>.*?</a\s*>" % TAG_BODY, re.IGNORECASE | re.DOTALL)
TAG_RE = re.compile(r"<[a-zA-Z/!]%s>" % TAG_BODY)
ENTITY_RE = re.compile(r"&(?:#\d+|#[xX][0-9a-fA-F]+|\w+);")
AUTO_LINK_RE = re.compile(
    r"""<a\s+[^>]*class="[^"]*\bauto-link\b[^"]*"[^>]*>(.*?)</a>""",
    re.IGNORECASE | re.DOTALL,
)
AUTO_LINK_OPEN_RE = re.compile(r"""<a\s+[^>]*class="[^"]*\bauto-link\b[^"]*"[^>]*>""", re.IGNORECASE)

Region = Tuple[int, int]


@dataclass(frozen=True)
class LinkTarget:
    name: str
    slug: str
    type: str  # "product" | "category"

    def url(self, site_slug: str) -> str:
        section = "products" if self.type == "product" else "categories"
        return f"/{site_slug}/{section}/{self.slug}"


def _targets(pairs, kind) -> List[LinkTarget]:
    targets = []
    for item in pairs or ():
        if isinstance(item, LinkTarget):
            targets.append(item)
            continue
        name, slug = item
        if name and name.strip() and slug:
            targets.append(LinkTarget(name=name.strip(), slug=slug, type=kind))
    return targets


def _merge(regions: List[Region]) -> List[Region]:
    if not regions:
        return []
    regions = sorted(regions)
    merged = [regions[0]]
    for start, end in regions[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def protected_regions(html: str) -> List[Region]:
    """Spans of ``html`` the linker must not touch.

    Skip-tag elements (links, headings, code), every tag's own markup so
    attributes are never rewritten, character entities and shortcode tokens.
    """
    regions = [m.span() for m in SKIP_TAGS_RE.finditer(html)]
    regions += [m.span() for m in ANCHOR_RE.finditer(html)]
    regions += [m.span() for m in TAG_RE.finditer(html)]
    regions += [m.span() for m in ENTITY_RE.finditer(html)]
    regions += shortcode_spans(html)
    return _merge(regions)


def _is_protected(start: int, end: int, regions: List[Region]) -> bool:
    return any(start < r_end and end > r_start for r_start, r_end in regions)


def _link_term(html, target, site_slug, regions, budget) -> Tuple[str, int]:
    pattern = re.compile(r"(?<!\w)(%s)(?!\w)" % re.escape(target.name), re.IGNORECASE)

    parts = []
    last = 0
    linked = 0
    for match in pattern.finditer(html):
        if linked >= budget:
            break
        if _is_protected(match.start(), match.end(), regions):
            continue
        parts.append(html[last:match.start()])
        parts.append(
            f'<a href="{target.url(site_slug)}" class="auto-link auto-link-{target.type}">'
            f"{match.group(1)}</a>"
        )
        last = match.end()
        linked += 1

    if not linked:
        return html, 0
    parts.append(html[last:])
    return "".join(parts), linked


def auto_link_content(
    html: str,
    *,
    site_slug: str,
    products: Optional[Iterable] = None,
    categories: Optional[Iterable] = None,
    max_links_per_term: int = 1,
) -> str:
    """Wrap the first unprotected occurrence of each known name in a link.

    ``products`` and ``categories`` are ``(name, slug)`` pairs or
    :class:`LinkTarget` objects. Longer names are linked first, so
    "Sony WH-1000XM4" wins over "Sony"; equal lengths keep input order with
    products ahead of categories. Matching is case-insensitive on word
    boundaries, and each distinct name (case-folded) is linked at most
    ``max_links_per_term`` times.
    """
    if not html:
        return html

    targets = _targets(products, "product") + _targets(categories, "category")
    # sorted() is stable, so ties keep product-before-category order
    targets = sorted(targets, key=lambda t: -len(t.name))

    counts = {}
    result = html
    for target in targets:
        key = target.name.lower()
        budget = max_links_per_term - counts.get(key, 0)
        if budget <= 0:
            continue
        # Recomputed each time so links added for longer names are protected
        result, linked = _link_term(result, target, site_slug, protected_regions(result), budget)
        counts[key] = counts.get(key, 0) + linked
    return result


def remove_auto_links(html: str) -> str:
    if not html:
        return html
    return AUTO_LINK_RE.sub(r"\1", html)


def count_auto_links(html: str) -> int:
    if not html:
        return 0
    return len(AUTO_LINK_OPEN_RE.findall(html))
