"""
Train listing and route option endpoints.

Both responses are cached per request parameters; a hit is served without
consulting the provider.
"""

from typing import Any

from fastapi import APIRouter, Depends, Response

from railops.api.shared.cache_flow import serve_cached
from railops.api.shared.cache_keys import routes_cache_key, trains_cache_key
from railops.api.shared.dependencies import get_dashboard_service, get_response_cache
from railops.api.shared.errors import bad_request, train_not_found
from railops.api.shared.validation import (
    require_text,
    require_train_id,
    validate_pagination,
)
from railops.models.requests import PageRequest, RouteOptionsRequest
from railops.models.trains import RouteOptionsResponse, TrainListResponse
from railops.services.dashboard import DashboardService
from railops.services.errors import InvalidRequestError, TrainNotFoundError
from railops.services.response_cache import ResponseCache

router = APIRouter()

# Cache names for metrics
_CACHE_TRAINS = "trains"
_CACHE_ROUTES = "routes"

DEFAULT_TRAIN_PAGE_SIZE = 3


@router.post(
    "/trains",
    response_model=TrainListResponse,
    summary="List trains for a hub, one page at a time",
)
async def list_trains(
    response: Response,
    payload: PageRequest | None = None,
    cache: ResponseCache = Depends(get_response_cache),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> Any:
    body = payload or PageRequest()
    try:
        hub = require_text(body.hub, "hub")
        page, page_size = validate_pagination(
            body.page, body.page_size, DEFAULT_TRAIN_PAGE_SIZE
        )
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc

    return await serve_cached(
        cache,
        trains_cache_key(hub, page, page_size),
        _CACHE_TRAINS,
        response,
        lambda: dashboard.list_trains(hub, page, page_size),
    )


@router.post(
    "/trains/routes",
    response_model=RouteOptionsResponse,
    summary="Current and alternate routes for one train",
)
async def route_options(
    response: Response,
    payload: RouteOptionsRequest | None = None,
    cache: ResponseCache = Depends(get_response_cache),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> Any:
    body = payload or RouteOptionsRequest()
    try:
        train_id = require_train_id(body.train_id)
        hub = require_text(body.hub, "hub")
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc

    # Unknown trains are rejected before the cache is consulted.
    try:
        dashboard.require_train(train_id)
    except TrainNotFoundError as exc:
        raise train_not_found(train_id) from exc

    return await serve_cached(
        cache,
        routes_cache_key(train_id, hub),
        _CACHE_ROUTES,
        response,
        lambda: dashboard.route_options(train_id, hub),
    )
