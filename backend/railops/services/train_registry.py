"""Authoritative, ordered collection of train records."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

from railops.models.trains import TrainRecord
from railops.services.errors import RegistryValidationError, TrainNotFoundError

logger = logging.getLogger(__name__)

_FLEET_ADAPTER = TypeAdapter(list[TrainRecord])


class TrainRegistry:
    """
    Ordered train records keyed by train id.

    Insertion order is preserved because pagination slices the list
    directly. Every write happens under a single lock and swaps in a
    complete new list, so readers only ever see whole states.
    """

    def __init__(self, records: Iterable[TrainRecord] = ()) -> None:
        self._records: list[TrainRecord] = []
        self._lock = asyncio.Lock()
        self.last_updated: datetime | None = None
        initial = list(records)
        if initial:
            self._swap(self._check_identity(initial))

    def __len__(self) -> int:
        return len(self._records)

    def list(self) -> list[TrainRecord]:
        """Current records in stable order."""
        return list(self._records)

    def find_by_id(self, train_id: str) -> TrainRecord | None:
        for record in self._records:
            if record.id == train_id:
                return record
        return None

    def snapshot(self) -> list[dict[str, Any]]:
        """JSON-ready copy of the fleet."""
        return [record.to_payload() for record in self._records]

    async def replace_all(self, records: Sequence[Any]) -> list[TrainRecord]:
        """Replace the fleet with a complete, well-formed set of trains.

        Raises:
            RegistryValidationError: payload is not a non-empty list of
                train objects with unique ids. Prior state is kept.
        """
        if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
            raise RegistryValidationError("Train fleet must be a list of train objects")
        try:
            parsed = _FLEET_ADAPTER.validate_python(list(records))
        except ValidationError as exc:
            raise RegistryValidationError(
                f"Train fleet failed validation: {exc.error_count()} error(s)"
            ) from exc
        if not parsed:
            raise RegistryValidationError("Train fleet must not be empty")

        async with self._lock:
            self._swap(self._check_identity(parsed))
        logger.info("Train registry replaced with %s trains", len(parsed))
        return self.list()

    async def update_one(self, train_id: str, patch: Mapping[str, Any]) -> TrainRecord:
        """Overlay fields onto one record. The record id never changes."""
        async with self._lock:
            index = self._index_of(train_id)
            try:
                updated = self._records[index].overlay(patch)
            except ValidationError as exc:
                raise RegistryValidationError(
                    f"Update for train '{train_id}' failed validation"
                ) from exc

            records = list(self._records)
            records[index] = updated
            self._swap(records)
        return updated

    async def apply(
        self, transform: Callable[[list[TrainRecord]], list[TrainRecord]]
    ) -> list[TrainRecord]:
        """Read-modify-write the whole fleet as one atomic step.

        `transform` receives the current records and must return records
        with the same ids in the same order; anything else is rejected and
        the registry is left untouched.
        """
        async with self._lock:
            current = list(self._records)
            updated = transform(current)
            if [record.id for record in updated] != [record.id for record in current]:
                raise RegistryValidationError(
                    "Fleet transform must preserve train membership and order"
                )
            self._swap(updated)
        return self.list()

    def _index_of(self, train_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == train_id:
                return index
        raise TrainNotFoundError(train_id)

    def _check_identity(self, records: list[TrainRecord]) -> list[TrainRecord]:
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise RegistryValidationError(f"Duplicate train id '{record.id}'")
            seen.add(record.id)
        return records

    def _swap(self, records: list[TrainRecord]) -> None:
        self._records = records
        self.last_updated = datetime.now(timezone.utc)


__all__ = ["TrainRegistry"]
