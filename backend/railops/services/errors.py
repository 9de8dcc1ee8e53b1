"""Domain exception definitions."""

from __future__ import annotations


class InvalidRequestError(Exception):
    """Raised when request parameters are missing or malformed."""


class TrainNotFoundError(Exception):
    """Raised when a train identifier is not present in the registry."""

    def __init__(self, train_id: str) -> None:
        super().__init__(f"Train '{train_id}' not found")
        self.train_id = train_id


class RegistryValidationError(Exception):
    """Raised when a replacement fleet is not a well-formed list of trains."""


class ProviderError(Exception):
    """Generic wrapper for generative text provider failures."""


class ProviderParseError(Exception):
    """Raised when provider output does not decode into the expected shape."""


__all__ = [
    "InvalidRequestError",
    "TrainNotFoundError",
    "RegistryValidationError",
    "ProviderError",
    "ProviderParseError",
]
