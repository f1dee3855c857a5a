from sqlalchemy.orm import joinedload

from affiliate.models import Niche, Site
from affiliate.tenancy.resolver import bare_domain
from .cache import request_memoized
from .mappers import map_site


def _active_sites():
    return Site.query.options(joinedload(Site.niche)).filter(Site.is_active.is_(True))


@request_memoized
def get_site_by_slug(slug):
    site = _active_sites().filter(Site.slug == slug).first()
    return map_site(site) if site else None


@request_memoized
def get_site_by_domain(domain):
    site = _active_sites().filter(Site.domain == bare_domain(domain)).first()
    return map_site(site) if site else None


@request_memoized
def get_all_sites():
    return [map_site(site) for site in _active_sites().order_by(Site.name.asc()).all()]


@request_memoized
def get_sites_by_niche(niche_slug):
    sites = (
        _active_sites()
        .join(Niche, Site.niche_id == Niche.id)
        .filter(Niche.slug == niche_slug)
        .order_by(Site.name.asc())
        .all()
    )
    return [map_site(site) for site in sites]
