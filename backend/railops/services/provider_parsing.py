"""Turn raw provider text into structured candidates.

Each helper raises ProviderParseError when the text does not have the
expected shape, keeping "the provider answered nonsense" distinct from
"the provider could not be reached".
"""

from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from railops.services.errors import ProviderParseError

M = TypeVar("M", bound=BaseModel)

_FENCE_OPEN = re.compile(r"^\s*```[a-zA-Z]*\s*\n?")
_FENCE_CLOSE = re.compile(r"\n?\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text)).strip()


def parse_json_text(text: str) -> Any:
    """Decode provider text as JSON."""
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ProviderParseError("Provider returned empty text")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ProviderParseError(f"Provider output is not valid JSON: {exc.msg}") from exc


def expect_object(value: Any, *, what: str = "payload") -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ProviderParseError(f"Expected a JSON object for {what}")
    return value


def expect_object_list(
    value: Any, *, what: str = "payload", key: str | None = None
) -> list[dict[str, Any]]:
    """Return a list of JSON objects.

    When `key` is given, an object wrapping the list under that key is
    accepted as well (``{"trains": [...]}``).
    """
    if key is not None and isinstance(value, dict) and key in value:
        value = value[key]
    if not isinstance(value, list):
        raise ProviderParseError(f"Expected a JSON array for {what}")
    if not all(isinstance(item, dict) for item in value):
        raise ProviderParseError(f"Every {what} entry must be a JSON object")
    return value


def parse_model(value: Any, model: type[M], *, what: str | None = None) -> M:
    """Validate decoded provider output against a response model."""
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        label = what or model.__name__
        raise ProviderParseError(
            f"Provider output does not match {label}: {exc.error_count()} error(s)"
        ) from exc


__all__ = [
    "strip_code_fences",
    "parse_json_text",
    "expect_object",
    "expect_object_list",
    "parse_model",
]
