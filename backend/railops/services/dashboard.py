"""
Dashboard operations: provider call, parse, then reconcile or fall back.

Every operation that consults the generative text provider is a failure
boundary. ProviderError and ProviderParseError are logged, counted and
replaced by the deterministic fallback from `seed_data` (or the local
patch documented next to each control action); they never reach the
HTTP layer. Request validation and unknown train ids are raised before
the provider is called.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, TypeVar

from railops.core.config import Settings
from railops.core.metrics import record_provider_result
from railops.models.trains import (
    ActionResponse,
    AlertFeed,
    AlertListResponse,
    AlertPagination,
    AnalyticsResponse,
    Recommendation,
    RouteOptionsResponse,
    TrainListResponse,
    TrainPagination,
    TrainRecord,
    TrainStatus,
)
from railops.services import prompts
from railops.services.errors import (
    ProviderError,
    ProviderParseError,
    RegistryValidationError,
    TrainNotFoundError,
)
from railops.services.provider import GenerativeTextProvider
from railops.services.provider_parsing import (
    expect_object,
    expect_object_list,
    parse_json_text,
    parse_model,
)
from railops.services.reconciler import FleetPatch, TrainReconciler, candidate_id
from railops.services.seed_data import (
    fallback_alerts,
    fallback_analytics,
    fallback_maintenance_details,
    fallback_route_options,
)
from railops.services.train_registry import TrainRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

SPEED_ACTIONS = ("hold", "resume")
RESUME_SPEED = 100


class DashboardService:
    """Computes every dashboard payload and applies every control action."""

    def __init__(
        self,
        registry: TrainRegistry,
        reconciler: TrainReconciler,
        provider: GenerativeTextProvider,
        settings: Settings,
    ) -> None:
        self.registry = registry
        self.reconciler = reconciler
        self.provider = provider
        self.settings = settings

    @property
    def provider_enabled(self) -> bool:
        return self.provider.enabled

    @property
    def last_sync(self) -> datetime | None:
        return self.registry.last_updated

    # ------------------------------------------------------------------
    # Provider boundary
    # ------------------------------------------------------------------

    async def _ask(self, operation: str, prompt: str) -> Any:
        """Call the provider and decode its text as JSON."""
        text = await self.provider.generate(prompt, operation=operation)
        return parse_json_text(text)

    def _degrade(self, operation: str, exc: Exception) -> None:
        if isinstance(exc, ProviderParseError):
            record_provider_result(operation, "parse_error")
        logger.warning("Using fallback for %s: %s", operation, exc)

    # ------------------------------------------------------------------
    # Fleet state
    # ------------------------------------------------------------------

    async def initialize(self) -> bool:
        """Replace the seed fleet with a provider-generated one, if possible.

        Returns True when the provider's fleet was installed. On failure the
        registry keeps whatever it was constructed with.
        """
        hub = self.settings.default_hub
        try:
            payload = await self._ask("initialize", prompts.initial_fleet(hub))
            trains = expect_object_list(payload, what="train", key="trains")
            await self.reconciler.replace_all(trains)
        except (ProviderError, ProviderParseError, RegistryValidationError) as exc:
            self._degrade("initialize", exc)
            return False
        return True

    async def sync_trains(self, hub: str | None = None) -> bool:
        """Merge a provider refresh into the registry.

        Returns False (leaving the registry untouched) when the provider
        failed or answered with something that could not be merged.
        """
        hub = hub or self.settings.default_hub
        try:
            payload = await self._ask(
                "sync", prompts.fleet_sync(hub, self.registry.snapshot())
            )
            candidates = expect_object_list(payload, what="train", key="trains")
            await self.reconciler.sync(candidates)
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("sync", exc)
            return False
        return True

    async def list_trains(self, hub: str, page: int, page_size: int) -> TrainListResponse:
        await self.sync_trains(hub)
        trains = self.registry.list()
        items, total_pages = _paginate(trains, page, page_size)
        return TrainListResponse(
            trains=[train.to_payload() for train in items],
            pagination=TrainPagination(
                total_trains=len(trains),
                current_page=page,
                page_size=page_size,
                total_pages=total_pages,
            ),
        )

    def require_train(self, train_id: str) -> TrainRecord:
        train = self.registry.find_by_id(train_id)
        if train is None:
            raise TrainNotFoundError(train_id)
        return train

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    async def route_options(self, train_id: str, hub: str) -> RouteOptionsResponse:
        train = self.require_train(train_id)
        try:
            payload = await self._ask(
                "routes", prompts.route_options(train.to_payload(), hub)
            )
            return parse_model(
                expect_object(payload, what="route options"), RouteOptionsResponse
            )
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("routes", exc)
            return RouteOptionsResponse.model_validate(fallback_route_options(hub, train))

    async def analytics(self, hub: str) -> AnalyticsResponse:
        try:
            payload = await self._ask("analytics", prompts.analytics(hub))
            return parse_model(
                expect_object(payload, what="analytics"), AnalyticsResponse
            )
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("analytics", exc)
            return AnalyticsResponse.model_validate(fallback_analytics())

    async def alerts(self, hub: str, page: int, page_size: int) -> AlertListResponse:
        try:
            payload = await self._ask("alerts", prompts.alerts(hub))
            entries = expect_object_list(payload, what="alert", key="alerts")
            feed = parse_model({"alerts": entries}, AlertFeed)
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("alerts", exc)
            feed = AlertFeed.model_validate({"alerts": fallback_alerts(hub)})

        items, total_pages = _paginate(feed.alerts, page, page_size)
        return AlertListResponse(
            alerts=items,
            pagination=AlertPagination(
                total_alerts=len(feed.alerts),
                current_page=page,
                page_size=page_size,
                total_pages=total_pages,
            ),
        )

    async def recommendations(self) -> list[Recommendation]:
        """Provider recommendations for the current fleet; empty on failure."""
        try:
            payload = await self._ask(
                "recommendations", prompts.recommendations(self.registry.snapshot())
            )
            entries = expect_object_list(
                payload, what="recommendation", key="recommendations"
            )
            parsed = [
                parse_model(entry, Recommendation, what="recommendation")
                for entry in entries
            ]
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("recommendations", exc)
            return []
        return [
            rec if rec.id else rec.model_copy(update={"id": str(uuid.uuid4())})
            for rec in parsed
        ]

    # ------------------------------------------------------------------
    # Fleet-wide control actions
    # ------------------------------------------------------------------

    async def _fleet_action(
        self, operation: str, prompt: str, fallback: FleetPatch
    ) -> bool:
        """Overlay the provider's fleet onto the registry, else apply `fallback`.

        Returns True when the provider's answer was used.
        """
        try:
            payload = await self._ask(operation, prompt)
            candidates = expect_object_list(payload, what="train", key="trains")
            await self.reconciler.sync(candidates, mode=operation)
        except (ProviderError, ProviderParseError) as exc:
            self._degrade(operation, exc)
            await self.reconciler.patch_fleet(fallback)
            return False
        return True

    async def emergency_stop(self, hub: str) -> ActionResponse:
        used_provider = await self._fleet_action(
            "emergency_stop",
            prompts.emergency_stop(hub, self.registry.snapshot()),
            _emergency_stop_patch,
        )
        if used_provider:
            return ActionResponse(
                message="Emergency stop initiated for all trains using AI simulation"
            )
        return ActionResponse(message="Emergency stop initiated for all trains")

    async def activate_backup_routes(self, hub: str) -> ActionResponse:
        used_provider = await self._fleet_action(
            "backup_routes",
            prompts.backup_routes(hub, self.registry.snapshot()),
            _backup_route_patch,
        )
        if used_provider:
            return ActionResponse(
                message="Backup routes activated for all trains using AI simulation"
            )
        return ActionResponse(message="Backup routes activated for all trains")

    async def optimize_routes(self, hub: str) -> ActionResponse:
        used_provider = await self._fleet_action(
            "optimize_routes",
            prompts.optimize_routes(hub, self.registry.snapshot()),
            _optimize_route_patch,
        )
        if used_provider:
            return ActionResponse(message="Route optimization completed using AI analysis")
        return ActionResponse(message="Route optimization initiated for all trains")

    async def schedule_maintenance(self, hub: str, maintenance_type: str) -> ActionResponse:
        """Mark the trains affected by a maintenance window.

        The provider chooses the affected trains; ids it invents are
        ignored and an empty list marks nothing. When the answer has no
        affectedTrains list, or no usable answer at all, the first train
        is marked.
        """
        known_ids = [train.id for train in self.registry.list()]
        try:
            payload = await self._ask(
                "maintenance",
                prompts.maintenance_schedule(hub, maintenance_type, known_ids),
            )
            details = expect_object(payload, what="maintenance schedule")
            affected = _affected_train_ids(details.get("affectedTrains"))
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("maintenance", exc)
            affected = known_ids[:1]
            await self.reconciler.patch_fleet(_maintenance_patch(affected))
            return ActionResponse(
                message=f"Maintenance ({maintenance_type}) scheduled for train network",
                details=fallback_maintenance_details(hub, maintenance_type, affected),
            )

        if affected is None:
            affected = known_ids[:1]
        await self.reconciler.patch_fleet(_maintenance_patch(affected), mode="maintenance")
        return ActionResponse(
            message=f"Maintenance ({maintenance_type}) scheduled", details=details
        )

    async def allocate_platforms(self, hub: str) -> ActionResponse:
        """Assign a platform to every train."""
        try:
            payload = await self._ask(
                "platform_allocation",
                prompts.platform_allocation(hub, self.registry.snapshot()),
            )
            envelope = expect_object(payload, what="platform allocation")
            candidates = expect_object_list(
                envelope.get("trains"), what="platform allocation train"
            )
            summary = envelope.get("summary")
            if summary is not None and not isinstance(summary, dict):
                raise ProviderParseError("Platform allocation summary must be an object")
            await self.reconciler.sync(candidates, mode="platform_allocation")
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("platform_allocation", exc)
            await self.reconciler.patch_fleet(_platform_patch)
            return ActionResponse(message="Platform allocation optimized")

        return ActionResponse(
            message="Platform allocation optimized using AI", allocation=summary
        )

    # ------------------------------------------------------------------
    # Single-train control actions
    # ------------------------------------------------------------------

    async def reroute(self, train_id: str, new_route: Sequence[str]) -> ActionResponse:
        train = self.require_train(train_id)
        try:
            payload = await self._ask(
                "reroute", prompts.reroute(train.to_payload(), list(new_route))
            )
            await self.reconciler.merge_one(
                train_id, expect_object(payload, what="rerouted train")
            )
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("reroute", exc)
            await self.reconciler.patch_one(train_id, _reroute_patch(new_route))
            return ActionResponse(message=f"Train {train_id} rerouted successfully")
        return ActionResponse(
            message=f"Train {train_id} rerouted successfully using AI simulation"
        )

    async def toggle_speed(self, train_id: str, action: str) -> ActionResponse:
        """Hold or resume one train. `action` must be one of SPEED_ACTIONS."""
        if action not in SPEED_ACTIONS:
            raise ValueError(f"Unsupported speed action: {action}")
        train = self.require_train(train_id)
        verb = "held" if action == "hold" else "resumed"
        try:
            payload = await self._ask(
                "toggle_speed", prompts.toggle_speed(train.to_payload(), action)
            )
            await self.reconciler.merge_one(
                train_id, expect_object(payload, what="train")
            )
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("toggle_speed", exc)
            await self.reconciler.patch_one(train_id, _SPEED_PATCHES[action])
            return ActionResponse(message=f"Train {train_id} {verb}")
        return ActionResponse(message=f"Train {train_id} {verb} using AI simulation")

    # ------------------------------------------------------------------
    # Other
    # ------------------------------------------------------------------

    async def contact_emergency_services(self, hub: str, message: str) -> ActionResponse:
        """Log an emergency services contact. Does not touch the fleet."""
        try:
            payload = await self._ask(
                "emergency_contact", prompts.emergency_contact(hub, message)
            )
            details = expect_object(payload, what="emergency contact log")
        except (ProviderError, ProviderParseError) as exc:
            self._degrade("emergency_contact", exc)
            logger.info("Emergency contact requested for hub %s: %s", hub, message)
            return ActionResponse(message="Emergency services contacted")
        return ActionResponse(message="Emergency services contacted", details=details)


def _paginate(items: Sequence[T], page: int, page_size: int) -> tuple[list[T], int]:
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), math.ceil(len(items) / page_size)


def _affected_train_ids(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    ids = [candidate_id({"id": item}) for item in value]
    return [train_id for train_id in ids if train_id is not None]


# Local fallback patches. Each returns the fields to overlay, or None to
# leave the train as it is.


def _emergency_stop_patch(_: int, train: TrainRecord) -> Mapping[str, Any]:
    return {
        "speed": 0,
        "status": TrainStatus.EMERGENCY_STOPPED,
        "statusColor": "destructive",
        "eta": "Pending Emergency",
        "delay": train.delay_minutes + 30,
    }


def _backup_route_patch(_: int, train: TrainRecord) -> Mapping[str, Any]:
    start, end = train.route_endpoints()
    return {
        "route": f"{start} → Backup Station → {end}",
        "status": TrainStatus.ON_BACKUP_ROUTE,
        "statusColor": "warning",
        "eta": "Recalculating Backup",
        "delay": train.delay_minutes + 15,
    }


def _optimize_route_patch(_: int, train: TrainRecord) -> Mapping[str, Any] | None:
    if train.delay_minutes <= 0:
        return None
    return {
        "delay": math.floor(train.delay_minutes * 0.8),
        "eta": "Optimized",
        "status": TrainStatus.OPTIMIZED_ROUTE,
        "statusColor": "success",
    }


def _maintenance_patch(affected: Sequence[str]) -> FleetPatch:
    marked = set(affected)

    def patch(_: int, train: TrainRecord) -> Mapping[str, Any] | None:
        if train.id not in marked:
            return None
        return {
            "status": TrainStatus.SCHEDULED_MAINTENANCE,
            "statusColor": "warning",
            "eta": "Maintenance Scheduled",
        }

    return patch


def _platform_patch(index: int, train: TrainRecord) -> Mapping[str, Any]:
    platform = index + 1
    patch: dict[str, Any] = {"platform": platform}
    if train.next_stop == "Signal Clearance":
        patch["nextStop"] = f"Platform {platform}"
    if train.eta == "Pending":
        patch["eta"] = "Recalculating"
    return patch


def _reroute_patch(new_route: Sequence[str]) -> Mapping[str, Any]:
    return {
        "route": " → ".join(new_route),
        "eta": "Recalculating",
        "status": TrainStatus.REROUTED,
        "statusColor": "warning",
    }


_SPEED_PATCHES: dict[str, Mapping[str, Any]] = {
    "hold": {
        "speed": 0,
        "status": TrainStatus.HELD,
        "statusColor": "warning",
        "eta": "On Hold",
    },
    "resume": {
        "speed": RESUME_SPEED,
        "status": TrainStatus.RESUMED,
        "statusColor": "success",
        "eta": "Recalculating",
    },
}


__all__ = ["DashboardService", "SPEED_ACTIONS"]
