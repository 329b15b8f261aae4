"""Shared fixtures: example configs, a metric-free API client and a CLI runner."""
import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from app_spec import ServiceMetricConfig, get_example_configs


@pytest.fixture
def minimal_config() -> dict:
    """The smallest valid configuration (myapp / release-v1 / web)."""
    return get_example_configs()["minimal"]


@pytest.fixture
def full_config() -> dict:
    """A configuration exercising every optional section."""
    return get_example_configs()["node-web"]


@pytest.fixture
def cpu_metric() -> ServiceMetricConfig:
    return ServiceMetricConfig(type="cpu", threshold=80)


@pytest.fixture
def client(monkeypatch) -> TestClient:
    """TestClient with a fresh metrics exporter per test."""
    from controller import api
    monkeypatch.setattr(api, "_metrics_exporter", None)
    return TestClient(api.app)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
