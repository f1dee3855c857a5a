from flask import g, request
from werkzeug.utils import redirect
from werkzeug.wrappers import Request

from affiliate.tenancy.mappings import load_domain_mappings
from affiliate.tenancy.resolver import resolve_request

SITE_SLUG_ENVIRON_KEY = "affiliate.site_slug"


class TenantRoutingMiddleware:
    """
    WSGI wrapper that canonicalises ``www.`` hosts and rewrites bare public
    paths to ``/{site_slug}/...`` before Flask routes the request.
    """

    def __init__(self, wsgi_app, *, mappings, default_slug, override_param="site", logger=None):
        self.wsgi_app = wsgi_app
        self.mappings = mappings
        self.default_slug = default_slug
        self.override_param = override_param
        self.logger = logger

    def __call__(self, environ, start_response):
        req = Request(environ)

        resolution = resolve_request(
            req.host,
            environ.get("PATH_INFO") or "/",
            req.args,
            environ.get("QUERY_STRING", ""),
            self.mappings,
            default_slug=self.default_slug,
            forwarded_proto=req.headers.get("X-Forwarded-Proto"),
            override_param=self.override_param,
        )

        if resolution.is_redirect:
            return redirect(resolution.redirect_to, code=301)(environ, start_response)

        if resolution.site_slug:
            environ[SITE_SLUG_ENVIRON_KEY] = resolution.site_slug
        if resolution.path:
            if self.logger:
                self.logger.debug("Rewriting %s -> %s", environ.get("PATH_INFO"), resolution.path)
            environ["PATH_INFO"] = resolution.path

        return self.wsgi_app(environ, start_response)


def tenant_middleware(app):
    mappings = load_domain_mappings(app.config)
    app.extensions["domain_mappings"] = mappings

    app.wsgi_app = TenantRoutingMiddleware(
        app.wsgi_app,
        mappings=mappings,
        default_slug=app.config.get("DEFAULT_SITE_SLUG"),
        override_param=app.config.get("SITE_OVERRIDE_PARAM", "site"),
        logger=app.logger,
    )

    @app.before_request
    def load_tenant():
        # Slug the host resolved to; None for API and asset requests
        g.resolved_site_slug = request.environ.get(SITE_SLUG_ENVIRON_KEY)
