"""
Page-cache invalidation hook.

Mutations call revalidate_path() after a successful write so any cached render
of that page is treated as stale. This module does not store renders; it only
records which paths are stale and notifies listeners (e.g. a CDN purge
callback registered at startup).

Invalidation is fire-and-forget: a failing listener is logged and never
propagates into the handler that triggered it.
"""

import logging
from typing import Callable, List, Set

logger = logging.getLogger(__name__)

RevalidationListener = Callable[[str], None]

_stale_paths: Set[str] = set()
_listeners: List[RevalidationListener] = []


def register_revalidation_listener(listener: RevalidationListener) -> None:
    """Register a callback invoked with the path on every revalidation."""
    _listeners.append(listener)


def clear_revalidation_listeners() -> None:
    """Remove every registered listener."""
    _listeners.clear()


def revalidate_path(path: str) -> None:
    """
    Mark cached renders of `path` stale and notify listeners.

    Args:
        path: Route path, e.g. "/dashboard/invoices"
    """
    _stale_paths.add(path)
    logger.info(f"Revalidated path {path}")

    for listener in list(_listeners):
        try:
            listener(path)
        except Exception as e:
            logger.warning(f"Revalidation listener failed for {path}: {e}")


def is_stale(path: str) -> bool:
    return path in _stale_paths


def mark_fresh(path: str) -> None:
    """Clear the stale marker once the page has been rendered from fresh data."""
    _stale_paths.discard(path)
