"""Stored article/product HTML -> ordered, render-ready blocks.

Pipeline: heading ids, optional auto-linking, shortcode segmentation, then
dispatch of each block against a lookup fetched ahead of time. A shortcode
that cannot be resolved becomes a visible placeholder; it never fails the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from markupsafe import Markup

from .autolink import auto_link_content
from .headings import add_heading_ids
from .sanitizer import sanitize_html
from .shortcodes import (
    ComparisonBlock,
    ContentBlock,
    HtmlBlock,
    ProductBlock,
    ProductGridBlock,
    parse_content,
)

MIN_COMPARISON_PRODUCTS = 2


@dataclass(frozen=True)
class Linkables:
    """``(name, slug)`` pairs eligible for auto-linking."""

    products: Tuple[Tuple[str, str], ...] = ()
    categories: Tuple[Tuple[str, str], ...] = ()

    def __bool__(self):
        return bool(self.products or self.categories)


@dataclass(frozen=True)
class ProductLookup:
    products: Mapping[str, Any] = field(default_factory=dict)
    category_products: Mapping[str, Sequence[Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderedBlock:
    kind: str  # html | product | products | comparison | placeholder
    html: Optional[Markup] = None
    products: Tuple[Any, ...] = ()
    variant: str = "default"
    category_slug: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.kind == "placeholder"


def placeholder(message: str) -> RenderedBlock:
    return RenderedBlock(kind="placeholder", message=message)


def prepare_content(
    content: str,
    *,
    site_slug: str,
    linkables: Optional[Linkables] = None,
    auto_link: bool = True,
) -> str:
    html = add_heading_ids(content or "")
    if auto_link and linkables:
        html = auto_link_content(
            html,
            site_slug=site_slug,
            products=linkables.products,
            categories=linkables.categories,
        )
    return html


def render_block(block: ContentBlock, lookup: ProductLookup) -> RenderedBlock:
    if isinstance(block, HtmlBlock):
        return RenderedBlock(kind="html", html=sanitize_html(block.html))

    if isinstance(block, ProductBlock):
        product = lookup.products.get(block.slug)
        if product is None:
            return placeholder(f"Product not found: {block.slug}")
        return RenderedBlock(kind="product", products=(product,), variant=block.variant)

    if isinstance(block, ProductGridBlock):
        products = tuple(lookup.category_products.get(block.category_slug) or ())[:block.limit]
        if not products:
            return placeholder(f"No products found for category: {block.category_slug}")
        return RenderedBlock(kind="products", products=products, category_slug=block.category_slug)

    if isinstance(block, ComparisonBlock):
        products = tuple(
            lookup.products[slug] for slug in block.slugs if slug in lookup.products
        )
        if len(block.slugs) < MIN_COMPARISON_PRODUCTS or len(products) < MIN_COMPARISON_PRODUCTS:
            return placeholder(
                "Not enough products found for comparison. "
                f"Found: {len(products)}, Need: {MIN_COMPARISON_PRODUCTS}"
            )
        return RenderedBlock(kind="comparison", products=products)

    raise TypeError(f"Unsupported content block: {block!r}")


def render_blocks(blocks: Iterable[ContentBlock], lookup: ProductLookup) -> List[RenderedBlock]:
    return [render_block(block, lookup) for block in blocks]


def render_content(
    content: str,
    lookup: Optional[ProductLookup] = None,
    *,
    site_slug: str,
    linkables: Optional[Linkables] = None,
    auto_link: bool = True,
) -> List[RenderedBlock]:
    html = prepare_content(content, site_slug=site_slug, linkables=linkables, auto_link=auto_link)
    return render_blocks(parse_content(html), lookup or ProductLookup())
