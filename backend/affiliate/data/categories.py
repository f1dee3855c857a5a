from sqlalchemy import func

from affiliate.extensions import db
from affiliate.models import ArticleCategory, Article, Category, Product, ProductCategory
from .cache import request_memoized
from .mappers import map_article_category, map_category


def _walk_up(model, site_id, start_id):
    """Root-first ancestor chain of ``start_id``.

    Stops at a missing row, a NULL parent, a row from another site or an id
    that has already been visited.
    """
    chain = []
    seen = set()
    current_id = start_id
    while current_id and current_id not in seen:
        seen.add(current_id)
        node = db.session.get(model, current_id)
        if node is None or node.site_id != site_id:
            break
        chain.append(node)
        current_id = node.parent_id
    chain.reverse()
    return chain


def _build_tree(nodes, map_fn, counts):
    by_parent = {}
    for node in nodes:
        by_parent.setdefault(node.parent_id, []).append(node)

    ids = {node.id for node in nodes}

    def build(node, trail):
        if node.id in trail:
            return map_fn(node, children=(), count=counts.get(node.id, 0))
        children = [build(child, trail | {node.id}) for child in by_parent.get(node.id, [])]
        return map_fn(node, children=children, count=counts.get(node.id, 0))

    # Orphans whose parent is inactive or missing are treated as roots
    roots = [node for node in nodes if node.parent_id is None or node.parent_id not in ids]
    return [build(node, frozenset()) for node in roots]


# -------------------------------------------------
# Product categories
# -------------------------------------------------

def _active_categories(site_id):
    return Category.query.filter(Category.site_id == site_id, Category.is_active.is_(True))


def _product_counts(site_id):
    rows = (
        db.session.query(ProductCategory.category_id, func.count(Product.id))
        .join(Product, Product.id == ProductCategory.product_id)
        .filter(
            Product.site_id == site_id,
            Product.status == "PUBLISHED",
            Product.is_active.is_(True),
        )
        .group_by(ProductCategory.category_id)
        .all()
    )
    return dict(rows)


def _map_category(node, children, count):
    return map_category(node, children=children, product_count=count)


@request_memoized
def get_categories(site_id, category_type=None):
    query = _active_categories(site_id)
    if category_type:
        query = query.filter(Category.category_type == category_type)
    counts = _product_counts(site_id)
    rows = query.order_by(Category.sort_order.asc(), Category.name.asc()).all()
    return [map_category(c, product_count=counts.get(c.id, 0)) for c in rows]


@request_memoized
def get_category_by_slug(site_id, slug):
    category = _active_categories(site_id).filter(Category.slug == slug).first()
    if category is None:
        return None
    children = [
        map_category(child)
        for child in category.children
        if child.is_active and child.site_id == site_id
    ]
    return map_category(category, children=children, product_count=_product_counts(site_id).get(category.id, 0))


@request_memoized
def get_category_tree(site_id):
    rows = _active_categories(site_id).order_by(Category.sort_order.asc(), Category.name.asc()).all()
    return _build_tree(rows, _map_category, _product_counts(site_id))


@request_memoized
def get_category_breadcrumbs(site_id, category_id):
    return [map_category(node) for node in _walk_up(Category, site_id, category_id)]


@request_memoized
def get_linkable_categories(site_id):
    rows = (
        db.session.query(Category.name, Category.slug)
        .filter(Category.site_id == site_id, Category.is_active.is_(True))
        .all()
    )
    return [(name, slug) for name, slug in rows]


# -------------------------------------------------
# Article categories
# -------------------------------------------------

def _active_article_categories(site_id):
    return ArticleCategory.query.filter(
        ArticleCategory.site_id == site_id,
        ArticleCategory.is_active.is_(True),
    )


def _article_counts(site_id):
    rows = (
        db.session.query(Article.category_id, func.count(Article.id))
        .filter(Article.site_id == site_id, Article.status == "PUBLISHED", Article.category_id.isnot(None))
        .group_by(Article.category_id)
        .all()
    )
    return dict(rows)


def _map_article_category(node, children, count):
    return map_article_category(node, children=children, article_count=count)


@request_memoized
def get_article_categories(site_id, *, with_articles_only=False):
    counts = _article_counts(site_id)
    rows = _active_article_categories(site_id).order_by(
        ArticleCategory.sort_order.asc(), ArticleCategory.name.asc()
    ).all()
    records = [map_article_category(c, article_count=counts.get(c.id, 0)) for c in rows]
    if with_articles_only:
        records = [r for r in records if r.article_count > 0]
    return records


@request_memoized
def get_article_category_by_slug(site_id, slug):
    category = _active_article_categories(site_id).filter(ArticleCategory.slug == slug).first()
    if category is None:
        return None
    children = [
        map_article_category(child)
        for child in category.children
        if child.is_active and child.site_id == site_id
    ]
    return map_article_category(category, children=children, article_count=_article_counts(site_id).get(category.id, 0))


@request_memoized
def get_article_category_tree(site_id):
    rows = _active_article_categories(site_id).order_by(
        ArticleCategory.sort_order.asc(), ArticleCategory.name.asc()
    ).all()
    return _build_tree(rows, _map_article_category, _article_counts(site_id))


@request_memoized
def get_article_category_breadcrumbs(site_id, category_id):
    return [map_article_category(node) for node in _walk_up(ArticleCategory, site_id, category_id)]
