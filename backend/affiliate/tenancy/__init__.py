from .resolver import (
    Resolution,
    bare_domain,
    canonical_redirect,
    resolve_request,
    resolve_site_slug,
    rewrite_path,
)
from .mappings import build_domain_mappings, load_domain_mappings, write_domain_mappings

__all__ = [
    "Resolution",
    "bare_domain",
    "canonical_redirect",
    "resolve_request",
    "resolve_site_slug",
    "rewrite_path",
    "build_domain_mappings",
    "load_domain_mappings",
    "write_domain_mappings",
]
