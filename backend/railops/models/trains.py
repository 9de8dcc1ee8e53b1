from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

StatusColor = Literal["success", "warning", "destructive"]

# Alternate spellings seen in provider output, mapped to the payload names.
_FIELD_ALIASES = {
    "delayMinutes": "delay",
    "delay_minutes": "delay",
    "next_stop": "nextStop",
    "status_color": "statusColor",
}


def normalize_train_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Rename alternate field spellings to the dashboard payload names."""
    return {_FIELD_ALIASES.get(key, key): value for key, value in fields.items()}


class TrainStatus:
    """Status labels used by the dashboard; provider output may add others."""

    ON_TIME = "On Time"
    DELAYED = "Delayed"
    CRITICAL = "Critical"
    RUNNING = "Running"
    STOPPED = "Stopped"
    HELD = "Held at Station"
    RESUMED = "Resumed Travel"
    EMERGENCY_STOPPED = "Emergency Stopped"
    ON_BACKUP_ROUTE = "On Backup Route"
    REROUTED = "Rerouted"
    OPTIMIZED_ROUTE = "Optimized Route"
    SCHEDULED_MAINTENANCE = "Scheduled Maintenance"


class TrainRecord(BaseModel):
    """Current known state of one train.

    Records are frozen: every change goes through the reconciler, which
    builds a new record and swaps it into the registry.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str = Field(..., min_length=1, description="Train number, unique per registry.")
    name: str
    route: str = Field(..., description="Origin → destination description.")
    status: str
    delay_minutes: int = Field(
        default=0,
        ge=0,
        alias="delay",
        validation_alias=AliasChoices("delay", "delayMinutes", "delay_minutes"),
    )
    speed: int = Field(default=0, ge=0)
    location: str
    passengers: int = Field(default=0, ge=0)
    next_stop: str = Field(..., alias="nextStop")
    eta: str
    status_color: StatusColor = Field(..., alias="statusColor")
    platform: int | None = Field(default=None, ge=1)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready representation using the dashboard's field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def overlay(self, fields: Mapping[str, Any]) -> "TrainRecord":
        """Return a new record with `fields` written over this one.

        Fields that are not given keep their current value and the id is
        never overwritten. Raises pydantic.ValidationError when the merged
        record is not a valid train.
        """
        merged = self.to_payload()
        merged.update(normalize_train_fields(fields))
        merged["id"] = self.id
        return TrainRecord.model_validate(merged)

    def route_endpoints(self) -> tuple[str, str]:
        """Split the route into origin and final destination."""
        stops = [part.strip() for part in self.route.split("→")]
        return stops[0], stops[-1]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class TrainPagination(CamelModel):
    total_trains: int
    current_page: int
    page_size: int
    total_pages: int


class TrainListResponse(CamelModel):
    trains: list[dict[str, Any]]
    pagination: TrainPagination


class RouteOption(CamelModel):
    stations: list[str] = Field(..., min_length=1)
    distance: float | int = Field(..., ge=0, description="Total distance in km.")
    estimated_time: str


class RouteOptionsResponse(CamelModel):
    current_route: RouteOption
    alternate_routes: list[RouteOption] = Field(default_factory=list)


class PerformanceTrends(CamelModel):
    on_time_percentage: float | int
    average_delay: float | int
    critical_incidents: int
    average_speed: float | int
    passenger_load_factor: float | int


class ScheduleEntry(CamelModel):
    id: str
    name: str
    scheduled_departure: str
    actual_departure: str
    departure_deviation: int
    reliability_score: float | int


class AnalyticsResponse(CamelModel):
    performance_trends: PerformanceTrends
    schedule_analysis: list[ScheduleEntry] = Field(default_factory=list)


class Alert(CamelModel):
    id: str
    title: str
    description: str
    severity: Literal["critical", "warning", "info"]
    time: str
    section: str


class AlertFeed(CamelModel):
    alerts: list[Alert]


class AlertPagination(CamelModel):
    total_alerts: int
    current_page: int
    page_size: int
    total_pages: int


class AlertListResponse(CamelModel):
    alerts: list[Alert]
    pagination: AlertPagination


class Recommendation(CamelModel):
    id: str | None = None
    type: str = "routing"
    title: str
    description: str
    confidence: float | int = Field(default=0, ge=0, le=100)
    estimated_improvement: str = ""
    train_affected: str = ""
    time_window: str = ""


class ActionResponse(BaseModel):
    message: str
    details: dict[str, Any] | None = None
    allocation: dict[str, Any] | None = None


class HealthResponse(CamelModel):
    status: str
    trains_count: int
    provider_enabled: bool
    last_sync: str | None
