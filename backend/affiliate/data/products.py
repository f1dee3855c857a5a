from sqlalchemy import func
from sqlalchemy.orm import selectinload

from affiliate.extensions import db
from affiliate.models import Category, Product, ProductCategory
from .cache import request_memoized
from .mappers import map_product
from .records import Paginated

SORTS = {
    "default": (Product.is_featured.desc(), Product.sort_order.asc(), Product.title.asc()),
    "newest": (Product.published_at.desc(),),
    "rating": (Product.rating.desc(), Product.title.asc()),
    "price-asc": (Product.price_from.asc(), Product.title.asc()),
    "price-desc": (Product.price_from.desc(), Product.title.asc()),
    "title": (Product.title.asc(),),
}


def _published(site_id):
    return (
        Product.query.options(
            selectinload(Product.category_links).joinedload(ProductCategory.category)
        )
        .filter(
            Product.site_id == site_id,
            Product.status == "PUBLISHED",
            Product.is_active.is_(True),
        )
    )


@request_memoized
def get_products(site_id, *, page=1, per_page=12, category_slug=None, product_type=None,
                 featured=None, sort="default"):
    query = _published(site_id)

    if category_slug:
        query = (
            query.join(ProductCategory, ProductCategory.product_id == Product.id)
            .join(Category, Category.id == ProductCategory.category_id)
            .filter(Category.slug == category_slug, Category.site_id == site_id)
        )
    if product_type:
        query = query.filter(Product.product_type == product_type)
    if featured is not None:
        query = query.filter(Product.is_featured.is_(bool(featured)))

    page = max(int(page or 1), 1)
    per_page = max(int(per_page or 12), 1)
    total = query.order_by(None).count()
    rows = (
        query.order_by(*SORTS.get(sort, SORTS["default"]))
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return Paginated(items=[map_product(p) for p in rows], page=page, per_page=per_page, total=total)


@request_memoized
def get_product_by_slug(site_id, slug):
    product = _published(site_id).filter(Product.slug == slug).first()
    return map_product(product) if product else None


@request_memoized
def get_featured_products(site_id, limit=6):
    rows = (
        _published(site_id)
        .filter(Product.is_featured.is_(True))
        .order_by(Product.sort_order.asc(), Product.title.asc())
        .limit(limit)
        .all()
    )
    return [map_product(p) for p in rows]


@request_memoized
def get_related_products(site_id, product_id, product_type, limit=4):
    """Published products of the same type, excluding the current one."""
    rows = (
        _published(site_id)
        .filter(Product.product_type == product_type, Product.id != product_id)
        .order_by(*SORTS["default"])
        .limit(limit)
        .all()
    )
    return [map_product(p) for p in rows]


@request_memoized
def get_products_by_slugs(site_id, slugs):
    """``{slug: ProductRecord}`` for every published slug found."""
    slugs = sorted(set(slugs or ()))
    if not slugs:
        return {}
    rows = _published(site_id).filter(Product.slug.in_(slugs)).all()
    return {p.slug: map_product(p) for p in rows}


@request_memoized
def get_products_by_category_slug(site_id, category_slug, limit=3):
    rows = (
        _published(site_id)
        .join(ProductCategory, ProductCategory.product_id == Product.id)
        .join(Category, Category.id == ProductCategory.category_id)
        .filter(
            Category.site_id == site_id,
            Category.slug == category_slug,
            Category.is_active.is_(True),
        )
        .order_by(Product.is_featured.desc(), Product.sort_order.asc())
        .limit(limit)
        .all()
    )
    return [map_product(p) for p in rows]


@request_memoized
def get_linkable_products(site_id):
    """``(title, slug)`` pairs used by the auto-linker."""
    rows = (
        db.session.query(Product.title, Product.slug)
        .filter(
            Product.site_id == site_id,
            Product.status == "PUBLISHED",
            Product.is_active.is_(True),
        )
        .all()
    )
    return [(title, slug) for title, slug in rows]


@request_memoized
def get_product_types(site_id):
    rows = (
        db.session.query(Product.product_type, func.count(Product.id))
        .filter(Product.site_id == site_id, Product.status == "PUBLISHED", Product.is_active.is_(True))
        .group_by(Product.product_type)
        .order_by(Product.product_type.asc())
        .all()
    )
    return [(product_type, count) for product_type, count in rows]


def get_product_sitemap_entries(site_id):
    return (
        db.session.query(Product.slug, Product.updated_at)
        .filter(Product.site_id == site_id, Product.status == "PUBLISHED", Product.is_active.is_(True))
        .order_by(Product.slug.asc())
        .all()
    )


@request_memoized
def get_products_by_ids(site_id, product_ids):
    """Published products for ``product_ids``, in the order the ids were given."""
    product_ids = list(product_ids or ())
    if not product_ids:
        return []
    rows = {p.id: p for p in _published(site_id).filter(Product.id.in_(product_ids)).all()}
    return [map_product(rows[pid]) for pid in product_ids if pid in rows]
