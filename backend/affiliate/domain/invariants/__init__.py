from .exceptions import InvariantViolation
from .product import assert_product, assert_affiliate_links
from .taxonomy import assert_parent

__all__ = ["InvariantViolation", "assert_product", "assert_affiliate_links", "assert_parent"]
