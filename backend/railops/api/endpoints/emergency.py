from fastapi import APIRouter, Depends

from railops.api.shared.dependencies import get_dashboard_service
from railops.api.shared.errors import bad_request
from railops.api.shared.validation import require_text
from railops.models.requests import EmergencyContactRequest
from railops.models.trains import ActionResponse
from railops.services.dashboard import DashboardService
from railops.services.errors import InvalidRequestError

router = APIRouter()


@router.post("/contact", response_model=ActionResponse, response_model_exclude_none=True)
async def contact_emergency_services(
    payload: EmergencyContactRequest | None = None,
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ActionResponse:
    """Log a call to emergency services for a hub."""
    body = payload or EmergencyContactRequest()
    try:
        hub = require_text(body.hub, "hub")
        message = require_text(body.message, "message")
    except InvalidRequestError as exc:
        raise bad_request(str(exc)) from exc
    return await dashboard.contact_emergency_services(hub, message)
