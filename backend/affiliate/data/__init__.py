from .cache import RequestCache, init_request_cache, request_memoized
from .concurrency import fetch_concurrently

__all__ = ["RequestCache", "init_request_cache", "request_memoized", "fetch_concurrently"]
