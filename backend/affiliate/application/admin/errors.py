class EntityNotFound(Exception):
    """Raised when an id does not exist on the site it was looked up for."""


class SlugConflict(Exception):
    """Raised when a slug is already taken within the same site."""
