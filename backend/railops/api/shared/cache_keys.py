"""
Cache key generation functions for dashboard endpoints.

Keys are built from already-parsed parameters (integers for page and page
size), so "2" and 2 resolve to the same entry. Each endpoint kind has its
own prefix and keys never collide across kinds.
"""


def _segment(value: str) -> str:
    """Trim a free-text key segment and escape the key separator."""
    return value.strip().replace("%", "%25").replace(":", "%3A")


def trains_cache_key(hub: str, page: int, page_size: int) -> str:
    """Generate cache key for the paginated train listing."""
    return f"railops:trains:{_segment(hub)}:{page}:{page_size}"


def routes_cache_key(train_id: str, hub: str) -> str:
    """Generate cache key for a train's route options."""
    return f"railops:routes:{_segment(train_id)}:{_segment(hub)}"


def analytics_cache_key(hub: str) -> str:
    return f"railops:analytics:{_segment(hub)}"


def alerts_cache_key(hub: str, page: int, page_size: int) -> str:
    """Generate cache key for the paginated alert feed."""
    return f"railops:alerts:{_segment(hub)}:{page}:{page_size}"
