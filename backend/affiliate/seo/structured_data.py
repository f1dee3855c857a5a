"""Schema.org JSON-LD payloads.

Builders return plain dicts that templates emit with ``|tojson``. Optional
blocks are only added when the underlying data exists: no rating means no
``aggregateRating``, no price means no ``offers``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

SCHEMA_CONTEXT = "https://schema.org"

ARTICLE_SCHEMA_TYPES = {
    "REVIEW": "Review",
    "HOW_TO": "HowTo",
    "ROUNDUP": "ItemList",
    "COMPARISON": "ItemList",
}


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v not in (None, "", [], {})}


def _iso(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def article_schema_type(article_type: Optional[str]) -> str:
    return ARTICLE_SCHEMA_TYPES.get(article_type or "", "Article")


def product_json_ld(
    *,
    name: str,
    url: str,
    description: Optional[str] = None,
    images: Optional[Sequence[str]] = None,
    price: Optional[float] = None,
    currency: Optional[str] = None,
    rating: Optional[float] = None,
    review_count: Optional[int] = None,
    affiliate_url: Optional[str] = None,
    brand: Optional[str] = None,
    sku: Optional[str] = None,
    availability: str = "InStock",
    condition: str = "NewCondition",
) -> Dict[str, Any]:
    data = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Product",
        "name": name,
        "url": url,
        "description": description,
        "image": list(images) if images else None,
        "sku": sku,
        "brand": {"@type": "Brand", "name": brand} if brand else None,
    }

    if rating is not None:
        data["aggregateRating"] = _compact({
            "@type": "AggregateRating",
            "ratingValue": rating,
            "bestRating": 5,
            "worstRating": 1,
            "reviewCount": review_count if review_count else None,
        })

    if price is not None:
        data["offers"] = _compact({
            "@type": "Offer",
            "price": price,
            "priceCurrency": currency or "USD",
            "availability": f"{SCHEMA_CONTEXT}/{availability}",
            "itemCondition": f"{SCHEMA_CONTEXT}/{condition}",
            "url": affiliate_url,
        })

    return _compact(data)


def product_json_ld_for(ctx) -> Dict[str, Any]:
    """Product payload from a product :class:`~affiliate.rendering.context.PageContext`."""
    product = ctx.product
    return product_json_ld(
        name=product.title,
        url=ctx.product_url,
        description=product.excerpt,
        images=ctx.all_images,
        price=product.price_from,
        currency=product.price_currency,
        rating=ctx.rating,
        review_count=product.review_count,
        affiliate_url=product.primary_affiliate_url,
    )


def article_json_ld(
    *,
    article_type: Optional[str],
    headline: str,
    url: str,
    publisher: str,
    description: Optional[str] = None,
    image: Optional[str] = None,
    author: Optional[str] = None,
    publisher_logo: Optional[str] = None,
    date_published=None,
    date_modified=None,
    reviewed_item: Optional[Dict[str, Any]] = None,
    rating: Optional[float] = None,
    products: Optional[Iterable[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    schema_type = article_schema_type(article_type)
    products = list(products or [])

    publisher_obj = _compact({
        "@type": "Organization",
        "name": publisher,
        "logo": {"@type": "ImageObject", "url": publisher_logo} if publisher_logo else None,
    })
    author_obj = {"@type": "Person", "name": author} if author else None

    if schema_type == "ItemList" and products:
        return _compact({
            "@context": SCHEMA_CONTEXT,
            "@type": "ItemList",
            "name": headline,
            "description": description,
            "numberOfItems": len(products),
            "itemListElement": [
                _compact({
                    "@type": "ListItem",
                    "position": item.get("position", index),
                    "name": item["name"],
                    "url": item["url"],
                    "image": item.get("image"),
                    "description": item.get("description"),
                })
                for index, item in enumerate(products, start=1)
            ],
        })

    if schema_type == "Review":
        data = {
            "@context": SCHEMA_CONTEXT,
            "@type": "Review",
            "headline": headline,
            "url": url,
            "description": description,
            "image": image,
            "author": author_obj,
            "publisher": publisher_obj,
            "datePublished": _iso(date_published),
            "dateModified": _iso(date_modified),
        }
        if reviewed_item:
            data["itemReviewed"] = _compact({"@type": "Product", **reviewed_item})
        if rating is not None:
            data["reviewRating"] = {
                "@type": "Rating",
                "ratingValue": rating,
                "bestRating": 5,
                "worstRating": 1,
            }
        return _compact(data)

    if schema_type == "HowTo":
        return _compact({
            "@context": SCHEMA_CONTEXT,
            "@type": "HowTo",
            "name": headline,
            "description": description,
            "image": image,
            "author": author_obj,
            "datePublished": _iso(date_published),
            "dateModified": _iso(date_modified),
        })

    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": headline,
        "url": url,
        "description": description,
        "image": image,
        "author": author_obj,
        "publisher": publisher_obj,
        "datePublished": _iso(date_published),
        "dateModified": _iso(date_modified),
    })


def breadcrumb_json_ld(items) -> Optional[Dict[str, Any]]:
    """``items`` are objects or dicts with ``name`` and ``url``."""
    elements = []
    for index, item in enumerate(items or [], start=1):
        name = item["name"] if isinstance(item, dict) else item.name
        url = item["url"] if isinstance(item, dict) else item.url
        elements.append({"@type": "ListItem", "position": index, "name": name, "item": url})
    if not elements:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": elements,
    }


def faq_json_ld(faqs) -> Optional[Dict[str, Any]]:
    entities = [
        {
            "@type": "Question",
            "name": faq["question"],
            "acceptedAnswer": {"@type": "Answer", "text": faq["answer"]},
        }
        for faq in faqs or []
        if faq.get("question") and faq.get("answer")
    ]
    if not entities:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": entities,
    }


def website_json_ld(
    *,
    name: str,
    url: str,
    description: Optional[str] = None,
    search_url: Optional[str] = None,
    logo: Optional[str] = None,
    alternate_names: Optional[List[str]] = None,
) -> Dict[str, Any]:
    data = {
        "@context": SCHEMA_CONTEXT,
        "@type": "WebSite",
        "name": name,
        "url": url,
        "description": description,
        "alternateName": alternate_names,
    }
    if logo:
        data["publisher"] = {
            "@type": "Organization",
            "name": name,
            "logo": {"@type": "ImageObject", "url": logo},
        }
    if search_url:
        data["potentialAction"] = {
            "@type": "SearchAction",
            "target": {"@type": "EntryPoint", "urlTemplate": search_url},
            "query-input": "required name=search_term_string",
        }
    return _compact(data)
