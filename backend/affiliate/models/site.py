from affiliate.extensions import db
from .base import BaseModel

CONTENT_SLUGS = ("reviews", "articles", "guides", "blog")


class Site(BaseModel):
    __tablename__ = "sites"

    # Basic info
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    domain = db.Column(db.String(255), unique=True, nullable=False, index=True)
    tagline = db.Column(db.String(255))
    description = db.Column(db.Text)
    logo_url = db.Column(db.String(500))

    # Branding
    theme = db.Column(db.JSON, default=dict)
    social = db.Column(db.JSON, default=dict)
    gtm_id = db.Column(db.String(50))

    # URL segment for editorial content: /{site}/{content_slug}/...
    content_slug = db.Column(db.String(20), nullable=False, default="reviews")
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    niche_id = db.Column(db.String(36), db.ForeignKey("niches.id"), nullable=False, index=True)
    niche = db.relationship("Niche", back_populates="sites")

    products = db.relationship("Product", back_populates="site", cascade="all, delete-orphan", passive_deletes=True)
    articles = db.relationship("Article", back_populates="site", cascade="all, delete-orphan", passive_deletes=True)
