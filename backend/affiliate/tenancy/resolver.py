"""Host based tenant resolution.

Every public page is served under ``/{site_slug}/...``. Visitors never see
that prefix: the slug is derived from the Host header (or the ``site`` query
parameter during development) and prepended to the path before routing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

# Paths served outside the tenant tree
PASSTHROUGH_PREFIXES = ("/api", "/static", "/swagger", "/openapi", "/uploads")

FALLBACK_SITE_SLUG = "demo-gaming"


@dataclass(frozen=True)
class Resolution:
    site_slug: Optional[str] = None
    path: Optional[str] = None
    redirect_to: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect_to is not None


def strip_port(host: str) -> str:
    return (host or "").split(":", 1)[0]


def bare_domain(host: str) -> str:
    """``www.Example.com:8080`` -> ``example.com``"""
    domain = strip_port(host).lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def canonical_redirect(host: str, path: str, query: str = "", proto: Optional[str] = None) -> Optional[str]:
    """URL to permanently redirect a ``www.`` host to, or ``None``."""
    if not host or not host.lower().startswith("www."):
        return None

    scheme = (proto or "https").split(",")[0].strip() or "https"
    url = f"{scheme}://{host[4:]}{path or '/'}"
    if query:
        url = f"{url}?{query}"
    return url


def resolve_site_slug(
    host: str,
    mappings: Mapping[str, str],
    *,
    override: Optional[str] = None,
    default_slug: Optional[str] = None,
) -> str:
    """Pick the site slug for a request.

    Priority: explicit override, exact host (port included, so
    ``gaming.localhost:3000`` can be mapped), bare domain, the ``localhost``
    mapping, then ``default_slug``. Unmapped hosts never fail.
    """
    if override:
        return override

    host = (host or "").lower()
    if host in mappings:
        return mappings[host]

    domain = bare_domain(host)
    if domain in mappings:
        return mappings[domain]

    return mappings.get("localhost") or default_slug or FALLBACK_SITE_SLUG


def is_passthrough(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PASSTHROUGH_PREFIXES)


def rewrite_path(path: str, site_slug: str) -> Optional[str]:
    """Prefix ``path`` with the site slug; ``None`` when it is already scoped."""
    path = path or "/"
    first_segment = path.lstrip("/").split("/", 1)[0]
    if first_segment == site_slug:
        return None
    if path == "/":
        return f"/{site_slug}/"
    return f"/{site_slug}{path}"


def resolve_request(
    host: str,
    path: str,
    query_args: Mapping[str, str],
    query_string: str,
    mappings: Mapping[str, str],
    *,
    default_slug: Optional[str] = None,
    forwarded_proto: Optional[str] = None,
    override_param: str = "site",
) -> Resolution:
    redirect_to = canonical_redirect(host, path, query_string, forwarded_proto)
    if redirect_to:
        return Resolution(redirect_to=redirect_to)

    # Assets, API and files like robots.txt are routed as-is
    if is_passthrough(path) or "." in path:
        return Resolution()

    slug = resolve_site_slug(
        host,
        mappings,
        override=query_args.get(override_param),
        default_slug=default_slug,
    )
    return Resolution(site_slug=slug, path=rewrite_path(path, slug))
