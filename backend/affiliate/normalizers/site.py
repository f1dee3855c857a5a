def normalize_niche(niche):
    return {
        "id": niche.id,
        "slug": niche.slug,
        "name": niche.name,
        "description": niche.description,
        "product_types": niche.product_types or [],
        "category_types": niche.category_types or [],
        "partners": niche.partners or [],
        "layout_config": niche.layout_config,
    }


def normalize_site(site):
    return {
        "id": site.id,
        "slug": site.slug,
        "name": site.name,
        "domain": site.domain,
        "tagline": site.tagline,
        "description": site.description,
        "logo_url": site.logo_url,
        "theme": site.theme or {},
        "social": site.social or {},
        "gtm_id": site.gtm_id,
        "content_slug": site.content_slug,
        "is_active": site.is_active,
        "niche_id": site.niche_id,
        "niche": {"slug": site.niche.slug, "name": site.niche.name} if site.niche else None,
    }
