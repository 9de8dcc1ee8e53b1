"""
Merge untrusted train updates into the registry.

Provider output is treated strictly as a partial overlay:

* membership is closed: candidates with unknown ids are ignored and trains
  the provider leaves out are kept as they are;
* fields a candidate omits keep their current values;
* a batch that would produce any invalid record is rejected whole, so a
  bad response means "no improvement this cycle", never lost state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from railops.core.metrics import record_reconcile
from railops.models.trains import TrainRecord
from railops.services.errors import ProviderParseError, RegistryValidationError
from railops.services.train_registry import TrainRegistry

logger = logging.getLogger(__name__)

FleetPatch = Callable[[int, TrainRecord], Mapping[str, Any] | None]


def candidate_id(candidate: Mapping[str, Any]) -> str | None:
    """Identifier a candidate claims, normalised to the registry's string ids."""
    raw = candidate.get("id")
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return str(raw)
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return None


def index_candidates(candidates: Sequence[Mapping[str, Any]]) -> dict[str, Mapping[str, Any]]:
    """Map candidate id -> candidate. The first candidate for an id wins."""
    indexed: dict[str, Mapping[str, Any]] = {}
    for candidate in candidates:
        if not isinstance(candidate, Mapping):
            continue
        train_id = candidate_id(candidate)
        if train_id is not None and train_id not in indexed:
            indexed[train_id] = candidate
    return indexed


def merge_fleet(
    records: Sequence[TrainRecord], candidates: Sequence[Mapping[str, Any]]
) -> tuple[list[TrainRecord], int]:
    """Overlay matching candidates onto `records`, preserving order.

    Returns the merged list and how many records were overlaid.

    Raises:
        ProviderParseError: a merged record failed validation.
    """
    indexed = index_candidates(candidates)
    merged: list[TrainRecord] = []
    touched = 0
    for record in records:
        candidate = indexed.get(record.id)
        if candidate is None:
            merged.append(record)
            continue
        try:
            merged.append(record.overlay(candidate))
        except ValidationError as exc:
            raise ProviderParseError(
                f"Update for train '{record.id}' is not a valid train record"
            ) from exc
        touched += 1

    ignored = set(indexed) - {record.id for record in records}
    if ignored:
        logger.info("Ignoring updates for unknown trains: %s", sorted(ignored))
    return merged, touched


class TrainReconciler:
    """The only writer of the train registry."""

    def __init__(self, registry: TrainRegistry) -> None:
        self.registry = registry

    async def sync(
        self, candidates: Sequence[Mapping[str, Any]], *, mode: str = "sync"
    ) -> int:
        """Bulk-merge a provider batch. Returns the number of merged records."""
        touched = 0

        def transform(records: list[TrainRecord]) -> list[TrainRecord]:
            nonlocal touched
            merged, touched = merge_fleet(records, candidates)
            return merged

        try:
            await self.registry.apply(transform)
        except ProviderParseError:
            record_reconcile(mode, "rejected")
            raise
        record_reconcile(mode, "merged", touched)
        return touched

    async def merge_one(self, train_id: str, candidate: Mapping[str, Any]) -> TrainRecord:
        """Overlay a provider object onto one train.

        Raises:
            TrainNotFoundError: `train_id` is not registered.
            ProviderParseError: the merged record is invalid.
        """
        try:
            updated = await self.registry.update_one(train_id, _without_id(candidate))
        except RegistryValidationError as exc:
            record_reconcile("single", "rejected")
            raise ProviderParseError(str(exc)) from exc
        record_reconcile("single", "merged", 1)
        return updated

    async def patch_one(self, train_id: str, patch: Mapping[str, Any]) -> TrainRecord:
        """Apply a locally computed fallback patch to one train."""
        updated = await self.registry.update_one(train_id, patch)
        record_reconcile("fallback", "merged", 1)
        return updated

    async def patch_fleet(self, patch_for: FleetPatch, *, mode: str = "fallback") -> int:
        """Apply a locally computed patch to every train that `patch_for` selects.

        `patch_for(index, record)` returns the fields to overlay, or None to
        leave the record unchanged.
        """
        touched = 0

        def transform(records: list[TrainRecord]) -> list[TrainRecord]:
            nonlocal touched
            updated: list[TrainRecord] = []
            for index, record in enumerate(records):
                patch = patch_for(index, record)
                if patch:
                    updated.append(record.overlay(patch))
                    touched += 1
                else:
                    updated.append(record)
            return updated

        await self.registry.apply(transform)
        record_reconcile(mode, "merged", touched)
        return touched

    async def replace_all(self, records: Sequence[Any]) -> int:
        """Install a complete fleet (startup only)."""
        try:
            replaced = await self.registry.replace_all(records)
        except RegistryValidationError:
            record_reconcile("replace", "rejected")
            raise
        record_reconcile("replace", "merged", len(replaced))
        return len(replaced)


def _without_id(candidate: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in candidate.items() if key != "id"}


__all__ = ["TrainReconciler", "merge_fleet", "index_candidates", "candidate_id"]
