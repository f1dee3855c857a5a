from affiliate.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin


class Category(BaseModel, SiteMixin):
    """Product taxonomy node."""

    __tablename__ = "categories"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text)
    image = db.Column(db.String(500))
    category_type = db.Column(db.String(100))
    sort_order = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    parent_id = db.Column(db.String(36), db.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    parent = db.relationship("Category", remote_side="Category.id", back_populates="children")
    children = db.relationship("Category", back_populates="parent", order_by="Category.sort_order")

    product_links = db.relationship("ProductCategory", back_populates="category", cascade="all, delete-orphan")

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_category_slug_per_site"),
    )


class ArticleCategory(BaseModel, SiteMixin):
    """Editorial taxonomy node, independent of the product tree."""

    __tablename__ = "article_categories"

    name = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text)
    sort_order = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    parent_id = db.Column(db.String(36), db.ForeignKey("article_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    parent = db.relationship("ArticleCategory", remote_side="ArticleCategory.id", back_populates="children")
    children = db.relationship("ArticleCategory", back_populates="parent", order_by="ArticleCategory.sort_order")

    articles = db.relationship("Article", back_populates="category")

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_article_category_slug_per_site"),
    )
