import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from affiliate.extensions import db
from affiliate.models import Niche, Site
from affiliate.domain.validation import ValidationError, validate_site
from affiliate.tenancy.resolver import bare_domain
from affiliate.utils.transaction import transactional
from .errors import EntityNotFound, SlugConflict

logger = logging.getLogger(__name__)


def get_site(site_id: str) -> Site:
    site = db.session.get(Site, site_id)
    if site is None:
        raise EntityNotFound("Site not found")
    return site


def _clean(cleaned):
    if "domain" in cleaned:
        cleaned["domain"] = bare_domain(cleaned["domain"])
    if "niche_id" in cleaned and db.session.get(Niche, cleaned["niche_id"]) is None:
        raise ValidationError({"niche_id": "Unknown niche"})
    return cleaned


def _ensure_unique(*, slug=None, domain=None, exclude_id=None):
    for column, value, label in ((Site.slug, slug, "slug"), (Site.domain, domain, "domain")):
        if value is None:
            continue
        query = Site.query.filter(column == value)
        if exclude_id is not None:
            query = query.filter(Site.id != exclude_id)
        if db.session.query(query.exists()).scalar():
            raise SlugConflict(f"A site with this {label} already exists")


def create_site(*, data: Dict[str, Any], actor_id: Optional[str] = None) -> Site:
    cleaned = _clean(validate_site(data))
    _ensure_unique(slug=cleaned["slug"], domain=cleaned["domain"])

    site = Site(**cleaned)
    try:
        with transactional():
            db.session.add(site)
    except IntegrityError as exc:
        raise SlugConflict("A site with this slug or domain already exists") from exc

    logger.info("site.create id=%s slug=%s actor=%s", site.id, site.slug, actor_id)
    return site


def update_site(*, site_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> Site:
    site = get_site(site_id)
    cleaned = _clean(validate_site(data, partial=True))
    _ensure_unique(slug=cleaned.get("slug"), domain=cleaned.get("domain"), exclude_id=site.id)

    try:
        with transactional():
            for key, value in cleaned.items():
                setattr(site, key, value)
    except IntegrityError as exc:
        raise SlugConflict("A site with this slug or domain already exists") from exc

    logger.info("site.update id=%s actor=%s", site.id, actor_id)
    return site


def delete_site(*, site_id: str, actor_id: Optional[str] = None) -> None:
    site = get_site(site_id)
    with transactional():
        db.session.delete(site)
    logger.info("site.delete id=%s actor=%s", site_id, actor_id)
