from .niche import Niche
from .site import Site, CONTENT_SLUGS
from .category import Category, ArticleCategory
from .product import Product, ProductCategory, CONTENT_STATUSES
from .article import Article, ArticleProduct, ARTICLE_TYPES
from .media import Media
from .user import User, ROLES, user_sites

__all__ = [
    "Niche",
    "Site",
    "Category",
    "ArticleCategory",
    "Product",
    "ProductCategory",
    "Article",
    "ArticleProduct",
    "Media",
    "User",
    "user_sites",
    "CONTENT_SLUGS",
    "CONTENT_STATUSES",
    "ARTICLE_TYPES",
    "ROLES",
]
