"""Shared error handling utilities for API endpoints.

This module provides standardized error response functions for invalid
requests and unknown trains.
"""

from fastapi import HTTPException, status


def bad_request(detail: str) -> HTTPException:
    """Create a standardized HTTP 400 exception.

    Args:
        detail: Message describing the invalid parameter.

    Returns:
        An HTTPException with 400 status and detail message.
    """
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def train_not_found(train_id: str) -> HTTPException:
    """Create a standardized HTTP 404 exception for trains.

    Args:
        train_id: The train ID that was not found.

    Returns:
        An HTTPException with 404 status and detail message.
    """
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Train '{train_id}' not found",
    )
