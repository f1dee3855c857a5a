"""Run independent page reads side by side and join before rendering."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Mapping, Optional

from flask import current_app, g

logger = logging.getLogger(__name__)


def _run(name, loader, fallbacks):
    try:
        return loader()
    except Exception:
        if name not in fallbacks:
            raise
        logger.warning("Optional read %r failed, using fallback", name, exc_info=True)
        return fallbacks[name]


def fetch_concurrently(
    loaders: Mapping[str, Callable[[], Any]],
    *,
    fallbacks: Optional[Mapping[str, Any]] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, Any]:
    """Call every loader and return ``{name: result}``.

    Loaders named in ``fallbacks`` are optional: if they raise, the failure is
    logged and the fallback value is used. Any other failure propagates once
    all loaders have finished. Each worker runs in its own application context
    with the caller's request cache, so memoized reads are shared.
    """
    fallbacks = dict(fallbacks or {})
    workers = max_workers or current_app.config.get("PAGE_FETCH_WORKERS", 1)

    if workers <= 1 or len(loaders) <= 1:
        return {name: _run(name, loader, fallbacks) for name, loader in loaders.items()}

    app = current_app._get_current_object()
    cache = g.get("request_cache")

    def in_context(name, loader):
        with app.app_context():
            g.request_cache = cache
            return _run(name, loader, fallbacks)

    with ThreadPoolExecutor(max_workers=min(workers, len(loaders))) as pool:
        futures = {name: pool.submit(in_context, name, loader) for name, loader in loaders.items()}
        return {name: future.result() for name, future in futures.items()}
