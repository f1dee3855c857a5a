"""Request scoped memoization for data-access functions.

A :class:`RequestCache` is created in ``before_request`` and dropped in
``teardown_request``. Nothing survives the request: freshness is whatever the
database holds when the request starts reading.
"""

from __future__ import annotations

import threading
from functools import wraps
from typing import Any, Callable, Dict, Hashable

from flask import g, has_app_context

_MISSING = object()


class RequestCache:
    """Thread-safe ``key -> value`` store shared by a request and its fetch workers."""

    def __init__(self):
        self._values: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        with self._lock:
            value = self._values.get(key, _MISSING)
            if value is not _MISSING:
                self.hits += 1
                return value
            self.misses += 1

        value = loader()

        with self._lock:
            # First writer wins if two workers raced on the same key
            return self._values.setdefault(key, value)

    def __len__(self):
        with self._lock:
            return len(self._values)

    def clear(self):
        with self._lock:
            self._values.clear()


def _freeze(value):
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    if isinstance(value, dict):
        return tuple(sorted((k, _freeze(v)) for k, v in value.items()))
    return value


def current_cache():
    if not has_app_context():
        return None
    return g.get("request_cache")


def request_memoized(fn):
    """Memoize ``fn`` by function and arguments for the current request only."""
    key_prefix = f"{fn.__module__}.{fn.__qualname__}"

    @wraps(fn)
    def wrapper(*args, **kwargs):
        cache = current_cache()
        if cache is None:
            return fn(*args, **kwargs)

        key = (key_prefix, _freeze(args), _freeze(kwargs))
        return cache.get_or_load(key, lambda: fn(*args, **kwargs))

    wrapper.uncached = fn
    return wrapper


def init_request_cache(app):
    @app.before_request
    def open_request_cache():
        g.request_cache = RequestCache()

    @app.teardown_request
    def close_request_cache(exc):
        cache = g.pop("request_cache", None)
        if cache is not None:
            app.logger.debug("Request cache: %d hits, %d misses", cache.hits, cache.misses)
            cache.clear()
