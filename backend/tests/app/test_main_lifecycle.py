"""Tests for FastAPI app lifecycle helpers."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from railops import main
from railops.services.dashboard import DashboardService
from railops.services.response_cache import ResponseCache
from railops.services.train_registry import TrainRegistry


def test_request_id_middleware_respects_existing_header(monkeypatch):
    app = FastAPI()
    main._install_request_id_middleware(app)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    client = TestClient(app)
    response = client.get("/ping", headers={main.REQUEST_ID_HEADER: "external-id"})
    assert response.headers[main.REQUEST_ID_HEADER] == "external-id"

    monkeypatch.setattr(main, "uuid4", lambda: "generated-id")
    response = client.get("/ping")
    assert response.headers[main.REQUEST_ID_HEADER] == "generated-id"


def test_create_app_attaches_components(settings, fake_provider):
    app = main.create_app(settings=settings, provider=fake_provider)

    assert isinstance(app.state.train_registry, TrainRegistry)
    assert len(app.state.train_registry) == 10
    assert isinstance(app.state.response_cache, ResponseCache)
    assert app.state.response_cache.ttl_seconds == 300
    assert isinstance(app.state.dashboard, DashboardService)
    assert app.state.provider is fake_provider
    assert app.state.scheduler is None


def test_create_app_passes_otel_flag_to_fastapi(monkeypatch, settings, fake_provider):
    fastapi_call = {}

    def fake_instrument_fastapi(app: FastAPI, *, enabled: bool):
        fastapi_call["enabled"] = enabled

    monkeypatch.setattr(main, "instrument_fastapi", fake_instrument_fastapi)

    created_app = main.create_app(settings=settings, provider=fake_provider)

    assert isinstance(created_app, FastAPI)
    assert fastapi_call["enabled"] is False


@pytest.mark.asyncio
async def test_lifespan_initializes_and_closes_provider(
    monkeypatch, settings, fake_provider
):
    configure_calls = {}

    def fake_configure(**kwargs):
        configure_calls.update(kwargs)

    httpx_calls = {}

    def fake_instrument_httpx(*, enabled: bool):
        httpx_calls["enabled"] = enabled

    monkeypatch.setattr(main, "configure_opentelemetry", fake_configure)
    monkeypatch.setattr(main, "instrument_httpx", fake_instrument_httpx)
    app = main.create_app(settings=settings, provider=fake_provider)

    async with main.lifespan(app):
        assert configure_calls["service_name"] == settings.otel_service_name
        assert configure_calls["enabled"] is False
        assert httpx_calls["enabled"] is False
        assert fake_provider.calls_for("initialize")
        assert app.state.scheduler is None

    assert fake_provider.closed is True


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_scheduler(monkeypatch, settings, fake_provider):
    scheduler = MagicMock()
    scheduler.start = AsyncMock()
    scheduler.stop = AsyncMock()
    scheduler_cls = MagicMock(return_value=scheduler)
    monkeypatch.setattr(main, "TrainSyncScheduler", scheduler_cls)
    monkeypatch.setattr(main, "configure_opentelemetry", lambda **_: False)
    monkeypatch.setattr(main, "instrument_httpx", lambda **_: None)

    enabled = settings.model_copy(update={"scheduler_enabled": True})
    app = main.create_app(settings=enabled, provider=fake_provider)

    async with main.lifespan(app):
        scheduler.start.assert_awaited_once()
        assert app.state.scheduler is scheduler

    scheduler.stop.assert_awaited_once()
    scheduler_cls.assert_called_once_with(
        enabled, app.state.dashboard, app.state.response_cache
    )


def test_configure_logging_installs_handler_once(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    calls = []
    monkeypatch.setattr(main.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    main._configure_logging()

    assert calls and "%(name)s" in calls[0]["format"]

    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    calls.clear()
    main._configure_logging()
    assert calls == []
