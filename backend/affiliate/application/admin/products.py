import copy
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from affiliate.extensions import db
from affiliate.models import Category, Product, ProductCategory
from affiliate.domain.invariants import assert_product
from affiliate.domain.validation import ValidationError, missing_ids, validate_product
from affiliate.utils.transaction import transactional
from .common import apply_status, copy_slug, ensure_slug_available, get_for_site
from .errors import SlugConflict

logger = logging.getLogger(__name__)

# Columns copied verbatim by duplicate_product
COPY_FIELDS = (
    "excerpt", "description", "content", "featured_image", "gallery_images",
    "price_from", "price_to", "price_currency", "price_text", "rating", "review_count",
    "affiliate_links", "primary_affiliate_url", "product_type", "meta",
    "seo_title", "seo_description", "is_active", "sort_order",
)


def _set_categories(product, *, site_id, category_ids, primary_category_id):
    """Rebuild the product's category links from scratch."""
    category_ids = list(dict.fromkeys(category_ids or []))
    if primary_category_id and primary_category_id not in category_ids:
        raise ValidationError({"primary_category_id": "primary category must be one of category_ids"})

    categories = {}
    if category_ids:
        categories = {
            c.id: c
            for c in Category.query.filter(Category.id.in_(category_ids), Category.site_id == site_id).all()
        }
    missing = missing_ids(category_ids, categories)
    if missing:
        raise ValidationError({"category_ids": f"Unknown categories: {', '.join(missing)}"})

    product.category_links = [
        ProductCategory(category=categories[cid], is_primary=cid == primary_category_id)
        for cid in category_ids
    ]


def _set_primary_category(product, primary_category_id):
    """Re-flag the primary among the links the product already has."""
    linked = {link.category_id for link in product.category_links}
    if primary_category_id and primary_category_id not in linked:
        raise ValidationError({"primary_category_id": "primary category must be one of the product's categories"})
    for link in product.category_links:
        link.is_primary = link.category_id == primary_category_id


def create_product(*, site_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> Product:
    """
    Create a product on ``site_id``.

    Validation runs before anything touches the session, so a rejected
    payload persists nothing.
    """
    cleaned = validate_product(data)
    category_ids = cleaned.pop("category_ids", [])
    primary_category_id = cleaned.pop("primary_category_id", None)
    status = cleaned.pop("status", "DRAFT")

    ensure_slug_available(Product, site_id=site_id, slug=cleaned["slug"], label="product")

    product = Product(site_id=site_id, status="DRAFT", **cleaned)
    try:
        with transactional():
            apply_status(product, status)
            db.session.add(product)
            _set_categories(
                product,
                site_id=site_id,
                category_ids=category_ids,
                primary_category_id=primary_category_id,
            )
            db.session.flush()
            assert_product(product)
    except IntegrityError as exc:
        raise SlugConflict("A product with this slug already exists") from exc

    logger.info("product.create id=%s site=%s actor=%s", product.id, site_id, actor_id)
    return product


def update_product(*, site_id: str, product_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> Product:
    product = get_for_site(Product, site_id=site_id, entity_id=product_id, label="Product")

    cleaned = validate_product(data, partial=True)
    category_ids = cleaned.pop("category_ids", None)
    primary_set = "primary_category_id" in cleaned
    primary_category_id = cleaned.pop("primary_category_id", None)
    status = cleaned.pop("status", None)

    if "slug" in cleaned:
        ensure_slug_available(
            Product, site_id=site_id, slug=cleaned["slug"], exclude_id=product.id, label="product"
        )

    try:
        with transactional():
            for key, value in cleaned.items():
                setattr(product, key, value)
            apply_status(product, status)
            if category_ids is not None:
                _set_categories(
                    product,
                    site_id=site_id,
                    category_ids=category_ids,
                    primary_category_id=primary_category_id,
                )
            elif primary_set:
                _set_primary_category(product, primary_category_id)
            db.session.flush()
            assert_product(product)
    except IntegrityError as exc:
        raise SlugConflict("A product with this slug already exists") from exc

    logger.info("product.update id=%s site=%s actor=%s", product.id, site_id, actor_id)
    return product


def delete_product(*, site_id: str, product_id: str, actor_id: Optional[str] = None) -> None:
    product = get_for_site(Product, site_id=site_id, entity_id=product_id, label="Product")
    with transactional():
        db.session.delete(product)
    logger.info("product.delete id=%s site=%s actor=%s", product_id, site_id, actor_id)


def duplicate_product(*, site_id: str, product_id: str, actor_id: Optional[str] = None) -> Product:
    """
    Copy a product as a new draft.

    The copy gets a ``-copy`` slug suffix (numbered if taken), a "(Copy)"
    title, the same categories, and is never featured.
    """
    original = get_for_site(Product, site_id=site_id, entity_id=product_id, label="Product")

    duplicate = Product(
        site_id=site_id,
        title=f"{original.title} (Copy)",
        slug=copy_slug(Product, site_id=site_id, slug=original.slug),
        status="DRAFT",
        is_featured=False,
        **{field: copy.deepcopy(getattr(original, field)) for field in COPY_FIELDS},
    )
    duplicate.category_links = [
        ProductCategory(category_id=link.category_id, is_primary=link.is_primary)
        for link in original.category_links
    ]

    with transactional():
        db.session.add(duplicate)

    logger.info("product.duplicate id=%s from=%s site=%s actor=%s", duplicate.id, product_id, site_id, actor_id)
    return duplicate
