import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError

from affiliate.extensions import db
from affiliate.models import Site, User
from affiliate.domain.validation import ValidationError, missing_ids, validate_user
from affiliate.utils.transaction import transactional
from .errors import EntityNotFound, SlugConflict

logger = logging.getLogger(__name__)


def get_user(user_id: str) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise EntityNotFound("User not found")
    return user


def _sites(site_ids):
    site_ids = list(dict.fromkeys(site_ids or []))
    sites = Site.query.filter(Site.id.in_(site_ids)).all() if site_ids else []
    missing = missing_ids(site_ids, [s.id for s in sites])
    if missing:
        raise ValidationError({"site_ids": f"Unknown sites: {', '.join(missing)}"})
    return sites


def _apply(user, cleaned):
    password = cleaned.pop("password", None)
    site_ids = cleaned.pop("site_ids", None)
    if "email" in cleaned:
        cleaned["email"] = cleaned["email"].lower()
    for key, value in cleaned.items():
        setattr(user, key, value)
    if password:
        user.set_password(password)
    if site_ids is not None:
        user.sites = _sites(site_ids)


def _ensure_email_free(email, exclude_id=None):
    query = User.query.filter(User.email == email.lower())
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if db.session.query(query.exists()).scalar():
        raise SlugConflict("A user with this email already exists")


def create_user(*, data: Dict[str, Any], actor_id: Optional[str] = None) -> User:
    cleaned = validate_user(data)
    _ensure_email_free(cleaned["email"])

    user = User()
    _apply(user, cleaned)
    try:
        with transactional():
            db.session.add(user)
    except IntegrityError as exc:
        raise SlugConflict("A user with this email already exists") from exc

    logger.info("user.create id=%s role=%s actor=%s", user.id, user.role, actor_id)
    return user


def update_user(*, user_id: str, data: Dict[str, Any], actor_id: Optional[str] = None) -> User:
    user = get_user(user_id)
    cleaned = validate_user(data, partial=True)
    if "email" in cleaned:
        _ensure_email_free(cleaned["email"], exclude_id=user.id)

    with transactional():
        _apply(user, cleaned)

    logger.info("user.update id=%s actor=%s", user.id, actor_id)
    return user


def delete_user(*, user_id: str, actor_id: Optional[str] = None) -> None:
    if user_id == actor_id:
        raise ValidationError({"id": "You cannot delete your own account"})
    user = get_user(user_id)
    with transactional():
        db.session.delete(user)
    logger.info("user.delete id=%s actor=%s", user_id, actor_id)
