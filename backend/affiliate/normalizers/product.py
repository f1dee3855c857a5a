from ._dates import iso


def normalize_product(product, include_content=True):
    data = {
        "id": product.id,
        "site_id": product.site_id,
        "title": product.title,
        "slug": product.slug,
        "excerpt": product.excerpt,
        "featured_image": product.featured_image,
        "price_from": product.price_from,
        "price_to": product.price_to,
        "price_currency": product.price_currency,
        "price_text": product.price_text,
        "rating": product.rating,
        "review_count": product.review_count,
        "product_type": product.product_type,
        "status": product.status,
        "is_featured": product.is_featured,
        "is_active": product.is_active,
        "sort_order": product.sort_order,
        "published_at": iso(product.published_at),
        "created_at": iso(product.created_at),
        "updated_at": iso(product.updated_at),
        "category_ids": [link.category_id for link in product.category_links],
        "primary_category_id": next(
            (link.category_id for link in product.category_links if link.is_primary), None
        ),
    }

    if include_content:
        data.update({
            "description": product.description,
            "content": product.content,
            "gallery_images": product.gallery_images or [],
            "affiliate_links": product.affiliate_links or [],
            "primary_affiliate_url": product.primary_affiliate_url,
            "metadata": product.meta or {},
            "seo_title": product.seo_title,
            "seo_description": product.seo_description,
        })

    return data
