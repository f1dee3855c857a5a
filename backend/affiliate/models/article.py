from affiliate.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin

ARTICLE_TYPES = ("ROUNDUP", "REVIEW", "COMPARISON", "BUYING_GUIDE", "HOW_TO")


class Article(BaseModel, SiteMixin):
    __tablename__ = "articles"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    excerpt = db.Column(db.String(500))
    # Rich HTML with inline shortcodes
    content = db.Column(db.Text)
    featured_image = db.Column(db.String(500))

    article_type = db.Column(db.String(20), default="ROUNDUP", nullable=False)
    status = db.Column(db.String(20), default="DRAFT", nullable=False, index=True)
    author_name = db.Column(db.String(200))
    # [{question, answer}]
    faqs = db.Column(db.JSON, default=list)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)

    seo_title = db.Column(db.String(70))
    seo_description = db.Column(db.String(160))
    published_at = db.Column(db.DateTime(timezone=True))

    category_id = db.Column(db.String(36), db.ForeignKey("article_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    category = db.relationship("ArticleCategory", back_populates="articles")

    site = db.relationship("Site", back_populates="articles")
    product_links = db.relationship(
        "ArticleProduct",
        back_populates="article",
        order_by="ArticleProduct.position",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_article_slug_per_site"),
    )


class ArticleProduct(db.Model):
    __tablename__ = "article_products"

    article_id = db.Column(db.String(36), db.ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True)
    product_id = db.Column(db.String(36), db.ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    position = db.Column(db.Integer, default=0, nullable=False)

    article = db.relationship("Article", back_populates="product_links")
    product = db.relationship("Product")
