from .exceptions import InvariantViolation


def assert_affiliate_links(links):
    primaries = [link for link in links or [] if link.get("isPrimary")]
    if len(primaries) > 1:
        raise InvariantViolation("A product can have at most one primary affiliate link.")


def assert_product(product):
    """Invariants that must hold before a product row is committed."""
    assert_affiliate_links(product.affiliate_links)

    primaries = [link for link in product.category_links if link.is_primary]
    if len(primaries) > 1:
        raise InvariantViolation("A product can have at most one primary category.")

    for link in product.category_links:
        category = link.category
        if category is not None and category.site_id != product.site_id:
            raise InvariantViolation(
                f"Category '{category.slug}' belongs to another site."
            )
