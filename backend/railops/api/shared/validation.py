"""Input validation utilities for dashboard API endpoints.

Request bodies are loosely typed, so these helpers do the checking and
raise InvalidRequestError with the message returned to the caller.
"""

import re
from typing import Any

from railops.services.dashboard import SPEED_ACTIONS
from railops.services.errors import InvalidRequestError

_POSITIVE_INT = re.compile(r"^\s*\d+\s*$")

PAGINATION_ERROR = (
    "Invalid pagination parameters: page and pageSize must be positive integers."
)


def require_text(value: Any, name: str) -> str:
    """Return a stripped, non-empty string parameter."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequestError(f"Missing required parameter: {name} is required.")
    return value.strip()


def require_train_id(value: Any) -> str:
    """Train numbers may arrive as JSON numbers; ids are always strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return require_text(value, "trainId")


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a page-style parameter given as an integer or a digit string."""
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidRequestError(PAGINATION_ERROR)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _POSITIVE_INT.match(value):
        parsed = int(value)
    else:
        raise InvalidRequestError(PAGINATION_ERROR)
    if parsed < 1:
        raise InvalidRequestError(PAGINATION_ERROR)
    return parsed


def validate_pagination(page: Any, page_size: Any, default_page_size: int) -> tuple[int, int]:
    return parse_positive_int(page, 1), parse_positive_int(page_size, default_page_size)


def validate_route_stations(value: Any) -> list[str]:
    """A new route is a non-empty ordered list of station names."""
    if (
        not isinstance(value, list)
        or not value
        or not all(isinstance(station, str) and station.strip() for station in value)
    ):
        raise InvalidRequestError(
            "Invalid parameter: newRoute must be a non-empty list of station names."
        )
    return [station.strip() for station in value]


def validate_speed_action(value: Any) -> str:
    action = value.strip().lower() if isinstance(value, str) else ""
    if action not in SPEED_ACTIONS:
        raise InvalidRequestError(
            "Invalid parameter: action must be one of " + ", ".join(SPEED_ACTIONS) + "."
        )
    return action
