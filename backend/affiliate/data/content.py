from affiliate.content.renderer import Linkables, ProductLookup
from affiliate.content.shortcodes import ShortcodeReferences
from .categories import get_linkable_categories
from .products import get_linkable_products, get_products_by_category_slug, get_products_by_slugs


def get_product_lookup(site_id, refs: ShortcodeReferences) -> ProductLookup:
    """Everything the shortcodes in one piece of content reference, fetched up front."""
    if refs.is_empty:
        return ProductLookup()

    products = get_products_by_slugs(site_id, refs.product_slugs)
    category_products = {
        slug: get_products_by_category_slug(site_id, slug, limit=refs.category_limits.get(slug, 3))
        for slug in refs.category_slugs
    }
    return ProductLookup(products=products, category_products=category_products)


def get_linkables(site_id) -> Linkables:
    return Linkables(
        products=tuple(get_linkable_products(site_id)),
        categories=tuple(get_linkable_categories(site_id)),
    )
