from sqlalchemy.orm import joinedload, selectinload

from affiliate.extensions import db
from affiliate.models import Article, ArticleCategory, ArticleProduct
from .cache import request_memoized
from .mappers import map_article
from .records import Paginated


def _published(site_id):
    return (
        Article.query.options(
            joinedload(Article.category),
            selectinload(Article.product_links),
        )
        .filter(Article.site_id == site_id, Article.status == "PUBLISHED")
    )


def _newest_first():
    return (Article.published_at.desc(), Article.created_at.desc())


@request_memoized
def get_articles(site_id, *, page=1, per_page=12, category_slug=None, article_type=None):
    query = _published(site_id)
    if category_slug:
        query = query.join(ArticleCategory, ArticleCategory.id == Article.category_id).filter(
            ArticleCategory.slug == category_slug,
            ArticleCategory.site_id == site_id,
        )
    if article_type:
        query = query.filter(Article.article_type == article_type)

    page = max(int(page or 1), 1)
    per_page = max(int(per_page or 12), 1)
    total = query.order_by(None).count()
    rows = query.order_by(*_newest_first()).offset((page - 1) * per_page).limit(per_page).all()
    return Paginated(items=[map_article(a) for a in rows], page=page, per_page=per_page, total=total)


@request_memoized
def get_article_by_slug(site_id, slug):
    article = _published(site_id).filter(Article.slug == slug).first()
    return map_article(article) if article else None


@request_memoized
def get_featured_articles(site_id, limit=3):
    rows = (
        _published(site_id)
        .filter(Article.is_featured.is_(True))
        .order_by(*_newest_first())
        .limit(limit)
        .all()
    )
    return [map_article(a) for a in rows]


@request_memoized
def get_recent_articles(site_id, limit=6):
    rows = _published(site_id).order_by(*_newest_first()).limit(limit).all()
    return [map_article(a) for a in rows]


@request_memoized
def get_related_articles(site_id, article_id, category_id=None, limit=3):
    """Same-category articles first, topped up with the most recent ones."""
    related = []
    if category_id:
        related = (
            _published(site_id)
            .filter(Article.category_id == category_id, Article.id != article_id)
            .order_by(*_newest_first())
            .limit(limit)
            .all()
        )
    if len(related) < limit:
        exclude = [article_id] + [a.id for a in related]
        related += (
            _published(site_id)
            .filter(Article.id.notin_(exclude))
            .order_by(*_newest_first())
            .limit(limit - len(related))
            .all()
        )
    return [map_article(a) for a in related]


@request_memoized
def get_articles_for_product(site_id, product_id, limit=4):
    """Published articles that feature ``product_id``."""
    rows = (
        _published(site_id)
        .join(ArticleProduct, ArticleProduct.article_id == Article.id)
        .filter(ArticleProduct.product_id == product_id)
        .order_by(Article.is_featured.desc(), *_newest_first())
        .limit(limit)
        .all()
    )
    return [map_article(a) for a in rows]


def get_article_sitemap_entries(site_id):
    return (
        db.session.query(Article.slug, Article.updated_at)
        .filter(Article.site_id == site_id, Article.status == "PUBLISHED")
        .order_by(Article.slug.asc())
        .all()
    )
