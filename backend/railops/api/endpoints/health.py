from fastapi import APIRouter, Depends

from railops.api.shared.dependencies import get_dashboard_service
from railops.models.trains import HealthResponse
from railops.services.dashboard import DashboardService

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def healthcheck(
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> HealthResponse:
    """Lightweight readiness probe with fleet and provider state."""
    last_sync = dashboard.last_sync
    return HealthResponse(
        status="healthy",
        trains_count=len(dashboard.registry),
        provider_enabled=dashboard.provider_enabled,
        last_sync=last_sync.isoformat() if last_sync else None,
    )
