import copy
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from affiliate.extensions import db
from affiliate.models import Article, ArticleCategory, ArticleProduct, Product
from affiliate.domain.invariants import InvariantViolation
from affiliate.domain.validation import ValidationError, missing_ids, validate_article
from affiliate.utils.transaction import transactional
from .common import apply_status, copy_slug, ensure_slug_available, get_for_site
from .errors import SlugConflict

logger = logging.getLogger(__name__)

COPY_FIELDS = (
    "excerpt", "content", "featured_image", "article_type", "author_name",
    "faqs", "seo_title", "seo_description", "category_id",
)


def _check_category(*, site_id, category_id):
    if not category_id:
        return
    category = db.session.get(ArticleCategory, category_id)
    if category is None:
        raise ValidationError({"category_id": "Unknown article category"})
    if category.site_id != site_id:
        raise InvariantViolation("Article category belongs to another site.")


def _set_products(article, *, site_id, product_ids):
    """Featured products, in the order given."""
    product_ids = list(dict.fromkeys(product_ids or []))
    found = set()
    if product_ids:
        found = {
            pid for (pid,) in db.session.query(Product.id).filter(
                Product.id.in_(product_ids), Product.site_id == site_id
            )
        }
    missing = missing_ids(product_ids, found)
    if missing:
        raise ValidationError({"product_ids": f"Unknown products: {', '.join(missing)}"})

    article.product_links = [
        ArticleProduct(product_id=pid, position=position)
        for position, pid in enumerate(product_ids)
    ]


def create_article(*, site_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> Article:
    cleaned = validate_article(data)
    product_ids = cleaned.pop("product_ids", [])
    status = cleaned.pop("status", "DRAFT")

    ensure_slug_available(Article, site_id=site_id, slug=cleaned["slug"], label="article")
    _check_category(site_id=site_id, category_id=cleaned.get("category_id"))

    article = Article(site_id=site_id, status="DRAFT", **cleaned)
    try:
        with transactional():
            apply_status(article, status)
            db.session.add(article)
            _set_products(article, site_id=site_id, product_ids=product_ids)
    except IntegrityError as exc:
        raise SlugConflict("An article with this slug already exists") from exc

    logger.info("article.create id=%s site=%s actor=%s", article.id, site_id, actor_id)
    return article


def update_article(*, site_id: str, article_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> Article:
    article = get_for_site(Article, site_id=site_id, entity_id=article_id, label="Article")

    cleaned = validate_article(data, partial=True)
    product_ids = cleaned.pop("product_ids", None)
    status = cleaned.pop("status", None)

    if "slug" in cleaned:
        ensure_slug_available(
            Article, site_id=site_id, slug=cleaned["slug"], exclude_id=article.id, label="article"
        )
    if "category_id" in cleaned:
        _check_category(site_id=site_id, category_id=cleaned["category_id"])

    try:
        with transactional():
            for key, value in cleaned.items():
                setattr(article, key, value)
            apply_status(article, status)
            if product_ids is not None:
                _set_products(article, site_id=site_id, product_ids=product_ids)
    except IntegrityError as exc:
        raise SlugConflict("An article with this slug already exists") from exc

    logger.info("article.update id=%s site=%s actor=%s", article.id, site_id, actor_id)
    return article


def delete_article(*, site_id: str, article_id: str, actor_id: Optional[str] = None) -> None:
    article = get_for_site(Article, site_id=site_id, entity_id=article_id, label="Article")
    with transactional():
        db.session.delete(article)
    logger.info("article.delete id=%s site=%s actor=%s", article_id, site_id, actor_id)


def duplicate_article(*, site_id: str, article_id: str, actor_id: Optional[str] = None) -> Article:
    """Copy an article, with its featured products, as an unfeatured draft."""
    original = get_for_site(Article, site_id=site_id, entity_id=article_id, label="Article")

    duplicate = Article(
        site_id=site_id,
        title=f"{original.title} (Copy)",
        slug=copy_slug(Article, site_id=site_id, slug=original.slug),
        status="DRAFT",
        is_featured=False,
        **{field: copy.deepcopy(getattr(original, field)) for field in COPY_FIELDS},
    )
    duplicate.product_links = [
        ArticleProduct(product_id=link.product_id, position=link.position)
        for link in original.product_links
    ]

    with transactional():
        db.session.add(duplicate)

    logger.info("article.duplicate id=%s from=%s site=%s actor=%s", duplicate.id, article_id, site_id, actor_id)
    return duplicate
