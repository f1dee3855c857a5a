from affiliate.extensions import db
from .base import BaseModel


class Niche(BaseModel):
    """A vertical (gaming, beauty, ...) shared by one or more sites."""

    __tablename__ = "niches"

    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)

    # Allowed shapes for products/categories of this vertical
    product_types = db.Column(db.JSON, default=list)
    category_types = db.Column(db.JSON, default=list)
    partners = db.Column(db.JSON, default=list)

    # zones -> ordered section descriptors; NULL means "use the default layout"
    layout_config = db.Column(db.JSON(none_as_null=True), nullable=True)

    sites = db.relationship("Site", back_populates="niche")
