"""Request bodies for the dashboard endpoints.

Fields are deliberately untyped: the endpoints validate them so that
missing or malformed parameters produce a 400 with a readable message.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DashboardRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    hub: Any = None


class PageRequest(DashboardRequest):
    page: Any = None
    page_size: Any = None


class RouteOptionsRequest(DashboardRequest):
    train_id: Any = None


class MaintenanceRequest(DashboardRequest):
    maintenance_type: Any = None


class RerouteRequest(DashboardRequest):
    train_id: Any = None
    new_route: Any = None


class ToggleSpeedRequest(DashboardRequest):
    train_id: Any = None
    action: Any = None


class EmergencyContactRequest(DashboardRequest):
    message: Any = None
