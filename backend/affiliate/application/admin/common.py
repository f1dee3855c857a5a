from affiliate.extensions import db
from affiliate.models.base import utc_now
from affiliate.domain.lifecycle.content import assert_content_transition
from .errors import EntityNotFound, SlugConflict


def get_for_site(model, *, site_id, entity_id, label):
    entity = model.query.filter_by(id=entity_id, site_id=site_id).first()
    if entity is None:
        raise EntityNotFound(f"{label} not found")
    return entity


def ensure_slug_available(model, *, site_id, slug, exclude_id=None, label="item"):
    query = model.query.filter(model.site_id == site_id, model.slug == slug)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    if db.session.query(query.exists()).scalar():
        raise SlugConflict(f"A {label} with this slug already exists")


def copy_slug(model, *, site_id, slug):
    """First free ``{slug}-copy``, ``{slug}-copy-1``, ``{slug}-copy-2``... on the site."""
    taken = {
        row.slug
        for row in db.session.query(model.slug).filter(
            model.site_id == site_id,
            model.slug.like(f"{slug}-copy%"),
        )
    }
    candidate = f"{slug}-copy"
    counter = 1
    while candidate in taken:
        candidate = f"{slug}-copy-{counter}"
        counter += 1
    return candidate


def apply_status(entity, new_status):
    """Move a product or article to ``new_status``, stamping ``published_at`` on first publish."""
    old_status = entity.status or "DRAFT"
    new_status = new_status or old_status
    assert_content_transition(from_status=old_status, to_status=new_status)
    entity.status = new_status
    if new_status == "PUBLISHED" and entity.published_at is None:
        entity.published_at = utc_now()
