"""
Shared dependency injection functions for API endpoints.

Core components are created once by the application factory and stored on
``app.state``; these functions hand them to the endpoints.
"""

from fastapi import Request

from railops.core.config import Settings
from railops.services.dashboard import DashboardService
from railops.services.response_cache import ResponseCache
from railops.services.train_registry import TrainRegistry


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_train_registry(request: Request) -> TrainRegistry:
    return request.app.state.train_registry


def get_dashboard_service(request: Request) -> DashboardService:
    return request.app.state.dashboard
