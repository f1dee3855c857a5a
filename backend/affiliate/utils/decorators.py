from functools import wraps
from flask import current_app, redirect, url_for
from flask_jwt_extended import get_jwt, get_jwt_identity


def _deny(reason):
    current_app.logger.info("Admin access denied for %s: %s", get_jwt_identity(), reason)
    return redirect(url_for("v1.list_sites"), code=302)


def admin_required(fn):
    """Only ADMIN users; everyone else is sent back to the sites list."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if get_jwt().get("role") != "ADMIN":
            return _deny("admin role required")
        return fn(*args, **kwargs)
    return wrapper


def site_access_required(fn):
    """ADMIN users, or OWNER users assigned to the ``site_id`` in the URL."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        claims = get_jwt()
        site_id = kwargs.get("site_id")
        if claims.get("role") != "ADMIN" and site_id not in (claims.get("site_ids") or []):
            return _deny(f"no access to site {site_id}")
        return fn(*args, **kwargs)
    return wrapper
