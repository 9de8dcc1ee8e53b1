from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from railops.core.config import Settings  # noqa: E402
from railops.main import create_app  # noqa: E402
from railops.services.dashboard import DashboardService  # noqa: E402
from railops.services.errors import ProviderError  # noqa: E402
from railops.services.reconciler import TrainReconciler  # noqa: E402
from railops.services.response_cache import ResponseCache  # noqa: E402
from railops.services.seed_data import seed_trains  # noqa: E402
from railops.services.train_registry import TrainRegistry  # noqa: E402


class FakeProvider:
    """Scripted stand-in for the generative text provider.

    Responses are queued per operation. A queued string is returned as the
    model text; a queued exception is raised. Operations with nothing
    queued fail with ProviderError, which sends callers down their
    fallback path.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.calls: list[tuple[str, str]] = []
        self._scripted: dict[str, list[Any]] = {}
        self.closed = False

    def script(self, operation: str, *responses: Any) -> None:
        for response in responses:
            if not isinstance(response, (str, BaseException)):
                response = json.dumps(response)
            self._scripted.setdefault(operation, []).append(response)

    def calls_for(self, operation: str) -> list[str]:
        return [prompt for op, prompt in self.calls if op == operation]

    async def generate(self, prompt: str, *, operation: str = "generate") -> str:
        self.calls.append((operation, prompt))
        queued = self._scripted.get(operation)
        if not queued:
            raise ProviderError(f"No scripted response for {operation}")
        response = queued.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        GEMINI_API_KEY="test-key",
        SCHEDULER_ENABLED=False,
        OTEL_ENABLED=False,
    )


@pytest.fixture()
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture()
def registry() -> TrainRegistry:
    return TrainRegistry(seed_trains())


@pytest.fixture()
def reconciler(registry: TrainRegistry) -> TrainReconciler:
    return TrainReconciler(registry)


@pytest.fixture()
def dashboard(
    registry: TrainRegistry,
    reconciler: TrainReconciler,
    fake_provider: FakeProvider,
    settings: Settings,
) -> DashboardService:
    return DashboardService(registry, reconciler, fake_provider, settings)


@pytest.fixture()
def response_cache() -> ResponseCache:
    return ResponseCache(ttl_seconds=300)


@pytest.fixture()
def app(settings: Settings, fake_provider: FakeProvider) -> FastAPI:
    return create_app(settings=settings, provider=fake_provider)


@pytest.fixture()
def api_client(app: FastAPI) -> Iterator[TestClient]:
    """Test client over the full app with a scripted provider.

    The lifespan is not entered, so the registry keeps the seed fleet and
    no scheduler is started.
    """
    yield TestClient(app)
