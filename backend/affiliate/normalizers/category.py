def normalize_category(category):
    data = {
        "id": category.id,
        "site_id": category.site_id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "parent_id": category.parent_id,
        "sort_order": category.sort_order,
        "is_active": category.is_active,
    }
    # Only product categories carry a type and an image
    if hasattr(category, "category_type"):
        data["category_type"] = category.category_type
        data["image"] = category.image
    return data
