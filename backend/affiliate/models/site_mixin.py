from sqlalchemy.orm import declared_attr
from affiliate.extensions import db


class SiteMixin:
    """Scopes a content row to exactly one site."""

    @declared_attr
    def site_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey("sites.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )
