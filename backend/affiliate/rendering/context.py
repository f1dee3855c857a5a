from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence, Tuple

from affiliate.content.renderer import RenderedBlock
from affiliate.data.records import ArticleRecord, CategoryRef, ProductRecord, SiteRecord
from .formatting import FormattedPrice, cta_text, format_product_price
from .urls import canonical_url


@dataclass(frozen=True)
class BreadcrumbItem:
    name: str
    url: str


@dataclass(frozen=True)
class PageContext:
    """Everything a product page's sections read, built once per request.

    Renderers receive it as an argument and never mutate it.
    """

    site: SiteRecord
    site_slug: str
    niche_slug: Optional[str]
    content_slug: str

    product: ProductRecord
    metadata: Mapping[str, Any]

    rating: Optional[float]
    price: FormattedPrice
    all_images: Tuple[str, ...]
    breadcrumb_items: Tuple[BreadcrumbItem, ...]

    affiliate_links: Tuple[Mapping[str, Any], ...]
    primary_partner: Optional[str]
    cta_text: str

    base_url: str
    product_url: str

    primary_category: Optional[CategoryRef]
    related_products: Tuple[ProductRecord, ...] = ()
    featured_articles: Tuple[ArticleRecord, ...] = ()
    content_blocks: Tuple[RenderedBlock, ...] = ()

    @property
    def primary_affiliate_url(self) -> Optional[str]:
        return self.product.primary_affiliate_url


def primary_link(links):
    for link in links:
        if link.get("isPrimary"):
            return link
    return links[0] if links else None


def primary_category(categories):
    for category in categories:
        if category.is_primary:
            return category
    return categories[0] if categories else None


def build_product_page_context(
    site: SiteRecord,
    product: ProductRecord,
    related_products: Sequence[ProductRecord] = (),
    featured_articles: Sequence[ArticleRecord] = (),
    content_blocks: Sequence[RenderedBlock] = (),
) -> PageContext:
    base_url = canonical_url(site, "")
    product_url = canonical_url(site, f"/products/{product.slug}")

    links = tuple(product.affiliate_links)
    link = primary_link(links)
    category = primary_category(product.categories)

    images = tuple(([product.featured_image] if product.featured_image else []) + list(product.gallery_images))

    breadcrumbs = [
        BreadcrumbItem("Home", base_url),
        BreadcrumbItem("Products", f"{base_url}/products"),
    ]
    if category:
        breadcrumbs.append(BreadcrumbItem(category.name, f"{base_url}/categories/{category.slug}"))
    breadcrumbs.append(BreadcrumbItem(product.title, product_url))

    niche_slug = site.niche.slug if site.niche else None

    return PageContext(
        site=site,
        site_slug=site.slug,
        niche_slug=niche_slug,
        content_slug=site.content_slug,
        product=product,
        metadata=MappingProxyType(dict(product.metadata or {})),
        rating=product.rating,
        price=format_product_price(
            product.price_from, product.price_to, product.price_currency, product.price_text
        ),
        all_images=images,
        breadcrumb_items=tuple(breadcrumbs),
        affiliate_links=links,
        primary_partner=link.get("partner") if link else None,
        cta_text=cta_text(niche_slug),
        base_url=base_url,
        product_url=product_url,
        primary_category=category,
        related_products=tuple(related_products),
        featured_articles=tuple(featured_articles),
        content_blocks=tuple(content_blocks),
    )
