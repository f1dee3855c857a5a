from werkzeug.security import generate_password_hash, check_password_hash
from affiliate.extensions import db
from .base import BaseModel

ROLES = ("ADMIN", "OWNER")

user_sites = db.Table(
    "user_sites",
    db.Column("user_id", db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("site_id", db.String(36), db.ForeignKey("sites.id", ondelete="CASCADE"), primary_key=True),
)


class User(BaseModel):
    __tablename__ = 'users'

    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(200))
    password_hash = db.Column(db.String(256), nullable=False)

    # ADMIN manages everything, OWNER only the sites linked below
    role = db.Column(db.String(20), nullable=False, default='OWNER')
    is_active = db.Column(db.Boolean, default=True)

    sites = db.relationship("Site", secondary=user_sites, lazy="selectin")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == "ADMIN"

    def can_manage(self, site_id):
        return self.is_admin or any(site.id == site_id for site in self.sites)
