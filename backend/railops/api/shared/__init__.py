"""Shared utilities for dashboard API endpoints.

This package provides cache keys, the cached-response flow, error helpers,
request validation and dependencies used across endpoint modules.
"""

from railops.api.shared.cache_flow import serve_cached
from railops.api.shared.dependencies import (
    get_app_settings,
    get_dashboard_service,
    get_response_cache,
    get_train_registry,
)
from railops.api.shared.errors import bad_request, train_not_found

__all__ = [
    # Cache flow
    "serve_cached",
    # Error handling
    "bad_request",
    "train_not_found",
    # Dependencies
    "get_app_settings",
    "get_dashboard_service",
    "get_response_cache",
    "get_train_registry",
]
