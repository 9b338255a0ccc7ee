"""Fixtures for API tests."""

from collections.abc import Callable, Generator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hello_otel.api.app import create_app
from hello_otel.api.dependencies import get_downstream_client
from hello_otel.config.settings import Settings
from hello_otel.downstream import DownstreamClient
from hello_otel.observability.logging import setup_logging

DOWNSTREAM_URL = "https://downstream.test/"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> Settings:
    """Settings with tracing on and every exporter off."""
    return Settings(
        downstream={"url": DOWNSTREAM_URL, "timeout_seconds": 1.0},
        observability={
            "logging": {"export": False, "format": "json"},
            "tracing": {"enabled": True},
            "metrics": {"enabled": False},
        },
        otlp={"service_name": "api-test", "service_version": "9.9.9"},
    )


@pytest.fixture
def downstream_handler() -> Handler:
    """Mock downstream answering 200; override per test."""
    return lambda request: httpx.Response(200)


@pytest.fixture
def app(settings: Settings, downstream_handler: Handler) -> Generator[FastAPI, None, None]:
    """Application with the downstream client routed to a mock transport."""
    setup_logging(level="DEBUG", format="json")

    app = create_app(settings)
    client = DownstreamClient(DOWNSTREAM_URL, transport=httpx.MockTransport(downstream_handler))
    app.dependency_overrides[get_downstream_client] = lambda: client

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client."""
    return TestClient(app)
