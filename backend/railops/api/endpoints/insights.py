"""Analytics, alert feed and recommendation endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Response

from railops.api.shared.cache_flow import serve_cached, to_payload
from railops.api.shared.cache_keys import alerts_cache_key, analytics_cache_key
from railops.api.shared.dependencies import get_dashboard_service, get_response_cache
from railops.api.shared.errors import bad_request
from railops.api.shared.validation import require_text, validate_pagination
from railops.models.requests import DashboardRequest, PageRequest
from railops.models.trains import AlertListResponse, AnalyticsResponse, Recommendation
from railops.services.dashboard import DashboardService
from railops.services.errors import InvalidRequestError
from railops.services.response_cache import ResponseCache

router = APIRouter()

# Cache names for metrics
_CACHE_ANALYTICS = "analytics"
_CACHE_ALERTS = "alerts"

DEFAULT_ALERT_PAGE_SIZE = 4


@router.post("/analytics", response_model=AnalyticsResponse)
async def analytics(
    response: Response,
    payload: DashboardRequest | None = None,
    cache: ResponseCache = Depends(get_response_cache),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> Any:
    """Performance trends and schedule adherence for a hub."""
    body = payload or DashboardRequest()
    try:
        hub = require_text(body.hub, "hub")
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc

    return await serve_cached(
        cache,
        analytics_cache_key(hub),
        _CACHE_ANALYTICS,
        response,
        lambda: dashboard.analytics(hub),
    )


@router.post("/alerts", response_model=AlertListResponse)
async def alerts(
    response: Response,
    payload: PageRequest | None = None,
    cache: ResponseCache = Depends(get_response_cache),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> Any:
    """Paginated alert feed for a hub."""
    body = payload or PageRequest()
    try:
        hub = require_text(body.hub, "hub")
        page, page_size = validate_pagination(
            body.page, body.page_size, DEFAULT_ALERT_PAGE_SIZE
        )
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc

    return await serve_cached(
        cache,
        alerts_cache_key(hub, page, page_size),
        _CACHE_ALERTS,
        response,
        lambda: dashboard.alerts(hub, page, page_size),
    )


@router.get("/recommendations", response_model=list[Recommendation])
async def recommendations(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> Any:
    """Traffic optimization suggestions for the current fleet (not cached)."""
    return to_payload(await dashboard.recommendations())
