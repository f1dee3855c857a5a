from flask import Blueprint

# Public site pages, always reached as /{site_slug}/... after tenant rewriting
site_bp = Blueprint("site", __name__)

# Import route modules so they register with site_bp
from . import context
from . import pages
from . import products
from . import articles
from . import contact
from . import seo
