from ._dates import iso


def normalize_article(article, include_content=True):
    data = {
        "id": article.id,
        "site_id": article.site_id,
        "title": article.title,
        "slug": article.slug,
        "excerpt": article.excerpt,
        "featured_image": article.featured_image,
        "article_type": article.article_type,
        "status": article.status,
        "author_name": article.author_name,
        "is_featured": article.is_featured,
        "category_id": article.category_id,
        "published_at": iso(article.published_at),
        "created_at": iso(article.created_at),
        "updated_at": iso(article.updated_at),
        "product_ids": [link.product_id for link in article.product_links],
    }

    if include_content:
        data.update({
            "content": article.content,
            "faqs": article.faqs or [],
            "seo_title": article.seo_title,
            "seo_description": article.seo_description,
        })

    return data
