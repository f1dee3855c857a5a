from typing import Set

from affiliate.domain.invariants.exceptions import InvariantViolation


class IllegalTransition(InvariantViolation):
    pass


# Explicit allowed status transitions for products and articles
ALLOWED_CONTENT_TRANSITIONS: dict[str, Set[str]] = {
    "DRAFT": {"PUBLISHED", "ARCHIVED"},
    "PUBLISHED": {"DRAFT", "ARCHIVED"},
    "ARCHIVED": {"DRAFT"},
}


def assert_content_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards product/article lifecycle transitions.
    Saving with an unchanged status is always allowed.
    """
    if from_status == to_status:
        return

    allowed = ALLOWED_CONTENT_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise IllegalTransition(
            f"Illegal status transition: {from_status} -> {to_status}"
        )
