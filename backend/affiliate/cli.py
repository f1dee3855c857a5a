"""``flask`` sub-commands: domain mapping generation and demo data."""

import logging

import click
from flask import current_app

from affiliate.domain.layout import BUILTIN_LAYOUTS
from affiliate.extensions import db
from affiliate.models import (
    Article,
    ArticleCategory,
    ArticleProduct,
    Category,
    Niche,
    Product,
    ProductCategory,
    Site,
    User,
)
from affiliate.models.base import utc_now
from affiliate.tenancy.mappings import build_domain_mappings, write_domain_mappings
from affiliate.utils.transaction import transactional

logger = logging.getLogger(__name__)


def generate_domain_mappings(path=None):
    """Write the active sites' domain table to ``path`` and return it."""
    path = path or current_app.config.get("DOMAIN_MAPPINGS_FILE") or "domain-mappings.json"
    sites = Site.query.filter(Site.is_active.is_(True)).order_by(Site.created_at.asc()).all()
    mappings = build_domain_mappings(sites)
    write_domain_mappings(mappings, path)
    logger.info("Wrote %d domain mappings to %s", len(mappings), path)
    return mappings


# -------------------------------------------------
# Demo data
# -------------------------------------------------

DEMO_NICHES = [
    {
        "slug": "gaming",
        "name": "Gaming",
        "description": "Gaming hardware, peripherals and accessories",
        "product_types": ["gaming_laptop", "gaming_mouse", "gaming_headset", "graphics_card"],
        "category_types": ["brand", "use_case", "price_range"],
        "partners": ["Amazon", "Best Buy", "Newegg"],
    },
    {
        "slug": "beauty",
        "name": "Beauty",
        "description": "Skincare, makeup and haircare",
        "product_types": ["skincare", "makeup", "haircare"],
        "category_types": ["skin_type", "concern", "brand"],
        "partners": ["Sephora", "Ulta", "Amazon"],
    },
]

DEMO_SITES = [
    {
        "slug": "demo-gaming",
        "name": "The Gaming Hub Guide",
        "domain": "thegaminghubguide.com",
        "tagline": "Honest reviews of gaming gear",
        "niche": "gaming",
        "content_slug": "reviews",
        "theme": {"primaryColor": "#7c3aed", "secondaryColor": "#111827", "accentColor": "#22d3ee"},
    },
    {
        "slug": "demo-beauty",
        "name": "Glow Picks",
        "domain": "glowpicks.com",
        "tagline": "Skincare that actually works",
        "niche": "beauty",
        "content_slug": "guides",
        "theme": {"primaryColor": "#db2777", "secondaryColor": "#1f2937", "accentColor": "#f9a8d4"},
    },
]

DEMO_PRODUCTS = {
    "demo-gaming": [
        {
            "slug": "razer-blade-15",
            "title": "Razer Blade 15",
            "product_type": "gaming_laptop",
            "excerpt": "A thin gaming laptop with a desktop-class GPU.",
            "price_from": 1999.99,
            "rating": 4.6,
            "review_count": 212,
            "is_featured": True,
            "affiliate_links": [
                {"partner": "Amazon", "url": "https://www.amazon.com/dp/example-blade", "isPrimary": True},
                {"partner": "Best Buy", "url": "https://www.bestbuy.com/site/example-blade"},
            ],
            "primary_affiliate_url": "https://www.amazon.com/dp/example-blade",
            "meta": {
                "pros": ["Excellent build quality", "Fast 240Hz display"],
                "cons": ["Runs hot under load"],
                "specifications": {"CPU": "Intel Core i9", "GPU": "RTX 4070", "RAM": "32GB"},
                "benchmarks": [{"name": "Cyberpunk 2077 (1440p)", "score": 78, "maxScore": 120, "unit": "fps"}],
            },
            "content": "<h2>Design</h2><p>The Razer Blade 15 pairs a CNC aluminium chassis with a fast panel.</p>",
            "category": "laptops",
        },
        {
            "slug": "logitech-g-pro-x",
            "title": "Logitech G Pro X Superlight",
            "product_type": "gaming_mouse",
            "excerpt": "An ultralight wireless esports mouse.",
            "price_from": 129.0,
            "rating": 4.8,
            "review_count": 1534,
            "affiliate_links": [{"partner": "Amazon", "url": "https://www.amazon.com/dp/example-gpro", "isPrimary": True}],
            "primary_affiliate_url": "https://www.amazon.com/dp/example-gpro",
            "meta": {"pros": ["63g weight"], "cons": ["No RGB"]},
            "category": "mice",
        },
    ],
    "demo-beauty": [
        {
            "slug": "cerave-hydrating-cleanser",
            "title": "CeraVe Hydrating Cleanser",
            "product_type": "skincare",
            "excerpt": "A gentle, non-foaming cleanser for dry skin.",
            "price_from": 15.99,
            "rating": 4.5,
            "review_count": 980,
            "is_featured": True,
            "affiliate_links": [{"partner": "Ulta", "url": "https://www.ulta.com/p/example-cerave", "isPrimary": True}],
            "primary_affiliate_url": "https://www.ulta.com/p/example-cerave",
            "meta": {
                "skinTypes": ["Dry", "Normal", "Sensitive"],
                "ingredients": [
                    {"name": "Ceramides", "isKey": True, "benefit": "Restore the skin barrier"},
                    {"name": "Hyaluronic Acid", "isKey": True},
                    {"name": "Glycerin"},
                ],
                "howToUse": ["Wet skin with lukewarm water", "Massage into skin", "Rinse"],
            },
            "category": "cleansers",
        },
    ],
}


def _seed_site(entry, niche):
    site = Site(
        slug=entry["slug"],
        name=entry["name"],
        domain=entry["domain"],
        tagline=entry["tagline"],
        theme=entry["theme"],
        content_slug=entry["content_slug"],
        niche=niche,
    )
    db.session.add(site)
    db.session.flush()

    categories = {}
    products = []
    for item in DEMO_PRODUCTS.get(site.slug, []):
        item = dict(item)
        category_slug = item.pop("category", None)
        if category_slug and category_slug not in categories:
            categories[category_slug] = Category(
                site_id=site.id,
                slug=category_slug,
                name=category_slug.replace("-", " ").title(),
                category_type=niche.category_types[0] if niche.category_types else None,
            )
            db.session.add(categories[category_slug])

        product = Product(site_id=site.id, status="PUBLISHED", published_at=utc_now(), **item)
        if category_slug:
            product.category_links = [ProductCategory(category=categories[category_slug], is_primary=True)]
        db.session.add(product)
        products.append(product)

    db.session.flush()

    guide_category = ArticleCategory(site_id=site.id, slug="buying-guides", name="Buying Guides")
    db.session.add(guide_category)

    shortcodes = "".join(f"<p>[product:{p.slug}]</p>" for p in products)
    article = Article(
        site_id=site.id,
        slug="best-picks",
        title=f"Best {niche.name} Picks This Year",
        excerpt=f"Our favourite {niche.name.lower()} products, tested.",
        content=f"<h2>Our Top Picks</h2>{shortcodes}<h2>How We Test</h2><p>Every product is used for at least two weeks.</p>",
        article_type="ROUNDUP",
        status="PUBLISHED",
        published_at=utc_now(),
        is_featured=True,
        author_name="Editorial Team",
        category=guide_category,
        faqs=[{"question": "How do you choose products?", "answer": "We buy and test them ourselves."}],
    )
    article.product_links = [ArticleProduct(product_id=p.id, position=i) for i, p in enumerate(products)]
    db.session.add(article)
    return site


def seed_demo_data(admin_email="admin@example.com", admin_password="change-me-now"):
    """Create the demo niches, sites, content and an admin user. Existing slugs are left alone."""
    created = []
    with transactional():
        niches = {}
        for entry in DEMO_NICHES:
            niche = Niche.query.filter_by(slug=entry["slug"]).first()
            if niche is None:
                layout = BUILTIN_LAYOUTS.get(entry["slug"])
                niche = Niche(layout_config=layout.to_dict() if layout else None, **entry)
                db.session.add(niche)
            niches[entry["slug"]] = niche

        for entry in DEMO_SITES:
            if Site.query.filter_by(slug=entry["slug"]).first() is None:
                created.append(_seed_site(entry, niches[entry["niche"]]))

        if User.query.filter_by(email=admin_email).first() is None:
            admin = User(email=admin_email, name="Admin", role="ADMIN")
            admin.set_password(admin_password)
            db.session.add(admin)

    logger.info("Seeded %d demo sites", len(created))
    return created


def register_cli(app):
    @app.cli.command("generate-domain-mappings")
    @click.option("--output", "-o", default=None, help="Where to write the JSON file.")
    def generate_domain_mappings_command(output):
        """Build the host -> site slug table from the database."""
        mappings = generate_domain_mappings(output)
        click.echo(f"Wrote {len(mappings)} domain mappings")

    @app.cli.command("seed")
    @click.option("--admin-email", default="admin@example.com")
    @click.option("--admin-password", default="change-me-now")
    def seed_command(admin_email, admin_password):
        """Create tables and load demo niches, sites and content."""
        db.create_all()
        sites = seed_demo_data(admin_email, admin_password)
        click.echo(f"Seeded {len(sites)} sites")
