from .exceptions import InvariantViolation


def assert_parent(node, parent, *, site_id):
    """A category's parent must live on the same site and must not be one of its descendants."""
    if parent is None:
        return

    if parent.site_id != site_id:
        raise InvariantViolation("Parent category belongs to another site.")

    seen = set()
    current = parent
    while current is not None:
        if node is not None and current.id == node.id:
            raise InvariantViolation("A category cannot be nested under itself.")
        if current.id in seen:
            break
        seen.add(current.id)
        current = current.parent
