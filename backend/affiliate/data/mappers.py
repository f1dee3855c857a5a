from typing import Optional

from .records import (
    ArticleCategoryRecord,
    ArticleRecord,
    CategoryRecord,
    CategoryRef,
    NicheRecord,
    ProductRecord,
    SiteRecord,
)


def _as_tuple(value):
    if not value:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return ()


def _as_dict(value):
    return dict(value) if isinstance(value, dict) else {}


def _as_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def map_niche(niche) -> Optional[NicheRecord]:
    if niche is None:
        return None
    return NicheRecord(
        id=niche.id,
        slug=niche.slug,
        name=niche.name,
        description=niche.description,
        product_types=_as_tuple(niche.product_types),
        category_types=_as_tuple(niche.category_types),
        partners=_as_tuple(niche.partners),
        layout_config=niche.layout_config if isinstance(niche.layout_config, dict) else None,
    )


def map_site(site) -> SiteRecord:
    return SiteRecord(
        id=site.id,
        slug=site.slug,
        name=site.name,
        domain=site.domain,
        tagline=site.tagline,
        description=site.description,
        logo_url=site.logo_url,
        theme=_as_dict(site.theme),
        social={k: v for k, v in _as_dict(site.social).items() if v},
        gtm_id=site.gtm_id,
        content_slug=site.content_slug or "reviews",
        is_active=bool(site.is_active),
        niche=map_niche(site.niche),
    )


def map_category_ref(link) -> CategoryRef:
    category = link.category
    return CategoryRef(
        id=category.id,
        slug=category.slug,
        name=category.name,
        category_type=category.category_type,
        is_primary=bool(link.is_primary),
    )


def map_product(product) -> ProductRecord:
    links = tuple(
        dict(link) for link in _as_tuple(product.affiliate_links)
        if isinstance(link, dict) and link.get("url")
    )
    categories = tuple(
        map_category_ref(link)
        for link in product.category_links
        if link.category is not None and link.category.is_active
    )
    return ProductRecord(
        id=product.id,
        site_id=product.site_id,
        slug=product.slug,
        title=product.title,
        product_type=product.product_type,
        excerpt=product.excerpt,
        description=product.description,
        content=product.content,
        featured_image=product.featured_image,
        gallery_images=tuple(img for img in _as_tuple(product.gallery_images) if img),
        price_from=_as_float(product.price_from),
        price_to=_as_float(product.price_to),
        price_currency=product.price_currency or "USD",
        price_text=product.price_text,
        rating=_as_float(product.rating),
        review_count=product.review_count or 0,
        affiliate_links=links,
        primary_affiliate_url=product.primary_affiliate_url,
        metadata=_as_dict(product.meta),
        seo_title=product.seo_title,
        seo_description=product.seo_description,
        status=product.status,
        is_featured=bool(product.is_featured),
        sort_order=product.sort_order or 0,
        published_at=product.published_at,
        updated_at=product.updated_at,
        categories=categories,
    )


def map_category(category, *, children=(), product_count=0) -> CategoryRecord:
    return CategoryRecord(
        id=category.id,
        site_id=category.site_id,
        slug=category.slug,
        name=category.name,
        description=category.description,
        image=category.image,
        category_type=category.category_type,
        parent_id=category.parent_id,
        sort_order=category.sort_order or 0,
        children=tuple(children),
        product_count=product_count,
    )


def map_article_category(category, *, children=(), article_count=0) -> ArticleCategoryRecord:
    return ArticleCategoryRecord(
        id=category.id,
        site_id=category.site_id,
        slug=category.slug,
        name=category.name,
        description=category.description,
        parent_id=category.parent_id,
        sort_order=category.sort_order or 0,
        children=tuple(children),
        article_count=article_count,
    )


def map_article(article) -> ArticleRecord:
    faqs = tuple(
        {"question": f["question"], "answer": f["answer"]}
        for f in _as_tuple(article.faqs)
        if isinstance(f, dict) and f.get("question") and f.get("answer")
    )
    return ArticleRecord(
        id=article.id,
        site_id=article.site_id,
        slug=article.slug,
        title=article.title,
        article_type=article.article_type,
        excerpt=article.excerpt,
        content=article.content,
        featured_image=article.featured_image,
        status=article.status,
        author_name=article.author_name,
        is_featured=bool(article.is_featured),
        faqs=faqs,
        seo_title=article.seo_title,
        seo_description=article.seo_description,
        published_at=article.published_at,
        updated_at=article.updated_at,
        category=map_article_category(article.category) if article.category else None,
        product_ids=tuple(link.product_id for link in article.product_links),
    )
