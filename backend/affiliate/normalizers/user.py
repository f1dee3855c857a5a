from ._dates import iso


def normalize_user(user):
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "is_active": user.is_active,
        "site_ids": [site.id for site in user.sites],
        "created_at": iso(user.created_at),
    }
