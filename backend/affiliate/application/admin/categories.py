"""Create/update/delete/duplicate for both taxonomies.

Product categories and article categories share one code path; they differ
only in the model and in whether ``category_type``/``image`` are accepted.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from affiliate.extensions import db
from affiliate.models import ArticleCategory, Category
from affiliate.domain.invariants import assert_parent
from affiliate.domain.validation import ValidationError, validate_category
from affiliate.utils.transaction import transactional
from .common import copy_slug, ensure_slug_available, get_for_site
from .errors import SlugConflict

logger = logging.getLogger(__name__)

LABELS = {Category: "category", ArticleCategory: "article category"}


def _resolve_parent(model, node, *, site_id, parent_id):
    if not parent_id:
        return None
    parent = db.session.get(model, parent_id)
    if parent is None:
        raise ValidationError({"parent_id": "Unknown parent category"})
    assert_parent(node, parent, site_id=site_id)
    return parent


def create_category(*, site_id: str, data: Dict[str, Any], model=Category, actor_id: Optional[str] = None):
    label = LABELS[model]
    cleaned = validate_category(data, with_type=model is Category)
    parent_id = cleaned.pop("parent_id", None)

    ensure_slug_available(model, site_id=site_id, slug=cleaned["slug"], label=label)

    category = model(site_id=site_id, **cleaned)
    category.parent = _resolve_parent(model, None, site_id=site_id, parent_id=parent_id)
    try:
        with transactional():
            db.session.add(category)
    except IntegrityError as exc:
        raise SlugConflict(f"A {label} with this slug already exists") from exc

    logger.info("%s.create id=%s site=%s actor=%s", model.__tablename__, category.id, site_id, actor_id)
    return category


def update_category(*, site_id: str, category_id: str, data: Dict[str, Any], model=Category,
                    actor_id: Optional[str] = None):
    label = LABELS[model]
    category = get_for_site(model, site_id=site_id, entity_id=category_id, label=label.capitalize())

    cleaned = validate_category(data, partial=True, with_type=model is Category)
    if "slug" in cleaned:
        ensure_slug_available(model, site_id=site_id, slug=cleaned["slug"], exclude_id=category.id, label=label)

    parent_set = "parent_id" in cleaned
    parent_id = cleaned.pop("parent_id", None)

    try:
        with transactional():
            for key, value in cleaned.items():
                setattr(category, key, value)
            if parent_set:
                category.parent = _resolve_parent(model, category, site_id=site_id, parent_id=parent_id)
    except IntegrityError as exc:
        raise SlugConflict(f"A {label} with this slug already exists") from exc

    logger.info("%s.update id=%s site=%s actor=%s", model.__tablename__, category.id, site_id, actor_id)
    return category


def delete_category(*, site_id: str, category_id: str, model=Category, actor_id: Optional[str] = None) -> None:
    """Children are re-parented to the deleted node's parent."""
    label = LABELS[model]
    category = get_for_site(model, site_id=site_id, entity_id=category_id, label=label.capitalize())
    with transactional():
        for child in list(category.children):
            child.parent = category.parent
        db.session.delete(category)
    logger.info("%s.delete id=%s site=%s actor=%s", model.__tablename__, category_id, site_id, actor_id)


def duplicate_category(*, site_id: str, category_id: str, actor_id: Optional[str] = None) -> Category:
    """Copy a product category's own fields; children and product links stay with the original."""
    original = get_for_site(Category, site_id=site_id, entity_id=category_id, label="Category")

    duplicate = Category(
        site_id=site_id,
        name=f"{original.name} (Copy)",
        slug=copy_slug(Category, site_id=site_id, slug=original.slug),
        description=original.description,
        image=original.image,
        category_type=original.category_type,
        sort_order=original.sort_order,
        is_active=original.is_active,
        parent_id=original.parent_id,
    )
    with transactional():
        db.session.add(duplicate)

    logger.info("categories.duplicate id=%s from=%s site=%s actor=%s", duplicate.id, category_id, site_id, actor_id)
    return duplicate
