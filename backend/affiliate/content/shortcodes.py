"""Inline shortcode grammar.

Editors embed products into article HTML with bracketed tokens::

    [product:<slug>]                  [product:<slug>:<variant>]
    [products:<category-slug>]        [products:<category-slug>:<limit>]
    [comparison:<slug>,<slug>,...]

A comma is accepted in place of the colon before the variant/limit, which is
what older content written in the rich-text editor contains.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple, Union

PRODUCT_VARIANTS = ("default", "compact", "featured")
DEFAULT_GRID_LIMIT = 3

SHORTCODE_RE = re.compile(
    r"\[(?:"
    r"product:(?P<product>[a-z0-9-]+)(?:[:,](?P<variant>\w+))?"
    r"|products:(?P<category>[a-z0-9-]+)(?:[:,](?P<limit>\d+))?"
    r"|comparison:(?P<slugs>[a-z0-9-]+(?:\s*,\s*[a-z0-9-]+)*)"
    r")\]",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class HtmlBlock:
    html: str
    kind: str = field(default="html", init=False)


@dataclass(frozen=True)
class ProductBlock:
    slug: str
    variant: str = "default"
    kind: str = field(default="product", init=False)


@dataclass(frozen=True)
class ProductGridBlock:
    category_slug: str
    limit: int = DEFAULT_GRID_LIMIT
    kind: str = field(default="products", init=False)


@dataclass(frozen=True)
class ComparisonBlock:
    slugs: Tuple[str, ...]
    kind: str = field(default="comparison", init=False)


ContentBlock = Union[HtmlBlock, ProductBlock, ProductGridBlock, ComparisonBlock]


@dataclass(frozen=True)
class ShortcodeReferences:
    product_slugs: Tuple[str, ...] = ()
    category_slugs: Tuple[str, ...] = ()
    # Largest grid size requested per category
    category_limits: Dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.product_slugs and not self.category_slugs


def _block_for(match) -> ContentBlock:
    if match.group("product"):
        variant = (match.group("variant") or "default").lower()
        if variant not in PRODUCT_VARIANTS:
            variant = "default"
        return ProductBlock(slug=match.group("product").lower(), variant=variant)

    if match.group("category"):
        limit = int(match.group("limit")) if match.group("limit") else DEFAULT_GRID_LIMIT
        return ProductGridBlock(category_slug=match.group("category").lower(), limit=max(limit, 1))

    slugs = tuple(s.strip().lower() for s in match.group("slugs").split(",") if s.strip())
    return ComparisonBlock(slugs=slugs)


def parse_content(content: str) -> List[ContentBlock]:
    """Split ``content`` into ordered HTML and shortcode blocks.

    Whitespace-only HTML between shortcodes is dropped; other HTML is kept
    byte for byte.
    """
    if not content:
        return []

    blocks: List[ContentBlock] = []
    position = 0
    for match in SHORTCODE_RE.finditer(content):
        before = content[position:match.start()]
        if before.strip():
            blocks.append(HtmlBlock(before))
        blocks.append(_block_for(match))
        position = match.end()

    rest = content[position:]
    if rest.strip():
        blocks.append(HtmlBlock(rest))
    return blocks


def has_shortcodes(content: str) -> bool:
    return bool(content) and SHORTCODE_RE.search(content) is not None


def shortcode_spans(content: str) -> List[Tuple[int, int]]:
    return [m.span() for m in SHORTCODE_RE.finditer(content or "")]


def extract_shortcode_references(content: Union[str, Iterable[ContentBlock]]) -> ShortcodeReferences:
    """Everything a piece of content will need from the product lookup."""
    blocks = parse_content(content) if isinstance(content, str) or content is None else list(content)

    products: List[str] = []
    categories: List[str] = []
    limits: Dict[str, int] = {}

    def add(items, value):
        if value not in items:
            items.append(value)

    for block in blocks:
        if isinstance(block, ProductBlock):
            add(products, block.slug)
        elif isinstance(block, ComparisonBlock):
            for slug in block.slugs:
                add(products, slug)
        elif isinstance(block, ProductGridBlock):
            add(categories, block.category_slug)
            limits[block.category_slug] = max(limits.get(block.category_slug, 0), block.limit)

    return ShortcodeReferences(
        product_slugs=tuple(products),
        category_slugs=tuple(categories),
        category_limits=limits,
    )


def validate_shortcodes(
    content: str,
    products: Mapping[str, object],
    categories: Mapping[str, object],
) -> Dict[str, List[str]]:
    """Referenced slugs missing from the given product/category maps."""
    refs = extract_shortcode_references(content)
    return {
        "missing_products": [s for s in refs.product_slugs if s not in products],
        "missing_categories": [s for s in refs.category_slugs if s not in categories],
    }
