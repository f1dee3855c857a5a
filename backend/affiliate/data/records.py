"""Read-only records handed to the rendering layer.

Data-access functions never return live ORM rows: pages and section renderers
work on these frozen snapshots, which keeps rendering free of lazy loads and
safe to share between worker threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class NicheRecord:
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    product_types: Tuple[Any, ...] = ()
    category_types: Tuple[Any, ...] = ()
    partners: Tuple[Any, ...] = ()
    layout_config: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class SiteRecord:
    id: str
    slug: str
    name: str
    domain: str
    tagline: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    theme: Dict[str, Any] = field(default_factory=dict)
    social: Dict[str, Any] = field(default_factory=dict)
    gtm_id: Optional[str] = None
    content_slug: str = "reviews"
    is_active: bool = True
    niche: Optional[NicheRecord] = None

    @property
    def niche_slug(self) -> str:
        return self.niche.slug if self.niche else "default"


@dataclass(frozen=True)
class CategoryRef:
    id: str
    slug: str
    name: str
    category_type: Optional[str] = None
    is_primary: bool = False


@dataclass(frozen=True)
class CategoryRecord:
    id: str
    site_id: str
    slug: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    category_type: Optional[str] = None
    parent_id: Optional[str] = None
    sort_order: int = 0
    children: Tuple["CategoryRecord", ...] = ()
    product_count: int = 0


@dataclass(frozen=True)
class ArticleCategoryRecord:
    id: str
    site_id: str
    slug: str
    name: str
    description: Optional[str] = None
    parent_id: Optional[str] = None
    sort_order: int = 0
    children: Tuple["ArticleCategoryRecord", ...] = ()
    article_count: int = 0


@dataclass(frozen=True)
class ProductRecord:
    id: str
    site_id: str
    slug: str
    title: str
    product_type: str
    excerpt: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    featured_image: Optional[str] = None
    gallery_images: Tuple[str, ...] = ()
    price_from: Optional[float] = None
    price_to: Optional[float] = None
    price_currency: str = "USD"
    price_text: Optional[str] = None
    rating: Optional[float] = None
    review_count: int = 0
    affiliate_links: Tuple[Dict[str, Any], ...] = ()
    primary_affiliate_url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    status: str = "PUBLISHED"
    is_featured: bool = False
    sort_order: int = 0
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    categories: Tuple[CategoryRef, ...] = ()


@dataclass(frozen=True)
class ArticleRecord:
    id: str
    site_id: str
    slug: str
    title: str
    article_type: str = "ROUNDUP"
    excerpt: Optional[str] = None
    content: Optional[str] = None
    featured_image: Optional[str] = None
    status: str = "PUBLISHED"
    author_name: Optional[str] = None
    is_featured: bool = False
    faqs: Tuple[Dict[str, str], ...] = ()
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[ArticleCategoryRecord] = None
    product_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Paginated(Generic[T]):
    items: List[T]
    page: int
    per_page: int
    total: int

    @property
    def pages(self) -> int:
        return (self.total + self.per_page - 1) // self.per_page if self.per_page else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
