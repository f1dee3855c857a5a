from affiliate.extensions import db
from .base import BaseModel
from .site_mixin import SiteMixin


class Media(BaseModel, SiteMixin):
    __tablename__ = "media"

    filename = db.Column(db.String(255), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    mime_type = db.Column(db.String(100))
    size = db.Column(db.Integer, default=0)
    alt_text = db.Column(db.String(255))

    uploaded_by = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
