from affiliate.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin

CONTENT_STATUSES = ("DRAFT", "PUBLISHED", "ARCHIVED")


class Product(BaseModel, SiteMixin):
    __tablename__ = "products"

    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(200), nullable=False, index=True)
    excerpt = db.Column(db.String(500))
    description = db.Column(db.Text)
    content = db.Column(db.Text)

    # Media
    featured_image = db.Column(db.String(500))
    gallery_images = db.Column(db.JSON, default=list)

    # Pricing
    price_from = db.Column(db.Float)
    price_to = db.Column(db.Float)
    price_currency = db.Column(db.String(3), default="USD")
    price_text = db.Column(db.String(100))

    # Ratings
    rating = db.Column(db.Float)
    review_count = db.Column(db.Integer, default=0)

    # [{partner, url, label?, isPrimary?}]
    affiliate_links = db.Column(db.JSON, default=list)
    primary_affiliate_url = db.Column(db.String(1000))

    product_type = db.Column(db.String(100), nullable=False)
    # Niche specific bag: pros, cons, specifications, ingredients, faqs...
    meta = db.Column("metadata", db.JSON, default=dict)

    seo_title = db.Column(db.String(70))
    seo_description = db.Column(db.String(160))

    status = db.Column(db.String(20), default="DRAFT", nullable=False, index=True)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    sort_order = db.Column(db.Integer, default=0, nullable=False)
    published_at = db.Column(db.DateTime(timezone=True))

    site = db.relationship("Site", back_populates="products")
    category_links = db.relationship(
        "ProductCategory",
        back_populates="product",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("site_id", "slug", name="uq_product_slug_per_site"),
    )


class ProductCategory(db.Model):
    __tablename__ = "product_categories"

    product_id = db.Column(db.String(36), db.ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    category_id = db.Column(db.String(36), db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True)
    is_primary = db.Column(db.Boolean, default=False, nullable=False)

    product = db.relationship("Product", back_populates="category_links")
    category = db.relationship("Category", back_populates="product_links")
