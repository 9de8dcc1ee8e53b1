"""
Train control endpoints.

Each action mutates the registry through the dashboard service. Responses
are never cached and the response cache is left alone; cached listings
refresh on expiry or the periodic sweep.
"""

from fastapi import APIRouter, Depends

from railops.api.shared.dependencies import get_app_settings, get_dashboard_service
from railops.api.shared.errors import bad_request, train_not_found
from railops.api.shared.validation import (
    require_text,
    require_train_id,
    validate_route_stations,
    validate_speed_action,
)
from railops.core.config import Settings
from railops.models.requests import (
    DashboardRequest,
    MaintenanceRequest,
    RerouteRequest,
    ToggleSpeedRequest,
)
from railops.models.trains import ActionResponse
from railops.services.dashboard import DashboardService
from railops.services.errors import InvalidRequestError, TrainNotFoundError

router = APIRouter()


def _hub_or_default(value: object, settings: Settings) -> str:
    if value is None:
        return settings.default_hub
    return require_text(value, "hub")


@router.post(
    "/emergency-stop", response_model=ActionResponse, response_model_exclude_none=True
)
async def emergency_stop(
    payload: DashboardRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    """Stop every train."""
    body = payload or DashboardRequest()
    try:
        hub = _hub_or_default(body.hub, settings)
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc
    return await dashboard.emergency_stop(hub)


@router.post(
    "/backup-routes", response_model=ActionResponse, response_model_exclude_none=True
)
async def backup_routes(
    payload: DashboardRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    """Move every train onto a backup route."""
    body = payload or DashboardRequest()
    try:
        hub = _hub_or_default(body.hub, settings)
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc
    return await dashboard.activate_backup_routes(hub)


@router.post(
    "/optimize-routes", response_model=ActionResponse, response_model_exclude_none=True
)
async def optimize_routes(
    payload: DashboardRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    """Cut delays of late trains."""
    body = payload or DashboardRequest()
    try:
        hub = _hub_or_default(body.hub, settings)
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc
    return await dashboard.optimize_routes(hub)


@router.post(
    "/schedule-maintenance",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def schedule_maintenance(
    payload: MaintenanceRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    body = payload or MaintenanceRequest()
    try:
        hub = _hub_or_default(body.hub, settings)
        maintenance_type = require_text(body.maintenance_type, "maintenanceType")
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc
    return await dashboard.schedule_maintenance(hub, maintenance_type)


@router.post(
    "/platform-allocation",
    response_model=ActionResponse,
    response_model_exclude_none=True,
)
async def platform_allocation(
    payload: DashboardRequest | None = None,
    settings: Settings = Depends(get_app_settings),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    """Assign a platform to every train."""
    body = payload or DashboardRequest()
    try:
        hub = _hub_or_default(body.hub, settings)
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc
    return await dashboard.allocate_platforms(hub)


@router.post("/reroute", response_model=ActionResponse, response_model_exclude_none=True)
async def reroute(
    payload: RerouteRequest | None = None,
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    body = payload or RerouteRequest()
    try:
        train_id = require_train_id(body.train_id)
        stations = validate_route_stations(body.new_route)
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc

    try:
        return await dashboard.reroute(train_id, stations)
    except TrainNotFoundError as exc:
        raise train_not_found(train_id) from exc


@router.post(
    "/toggle-speed", response_model=ActionResponse, response_model_exclude_none=True
)
async def toggle_speed(
    payload: ToggleSpeedRequest | None = None,
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    """Hold or resume a single train."""
    body = payload or ToggleSpeedRequest()
    try:
        train_id = require_train_id(body.train_id)
        action = validate_speed_action(body.action)
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc

    try:
        return await dashboard.toggle_speed(train_id, action)
    except TrainNotFoundError as exc:
        raise train_not_found(train_id) from exc
