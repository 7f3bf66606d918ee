from typing import Any

import pytest

from sphereirc.logging_config import error_aggregator
from tests.fixtures.transports import TransportFactory


@pytest.fixture
def transport_factory() -> TransportFactory:
    return TransportFactory()


@pytest.fixture
def client_config() -> dict[str, Any]:
    return {
        "nick": "sphere",
        "username": "sphereuser",
        "password": "secret",
        "realName": "Sphere Bot",
        "servers": [
            {"hostname": "irc.alpha.net", "port": 6667, "channels": ["lobby", "#dev"]},
            {"hostname": "irc.beta.org", "nick": "sphere_b"},
        ],
    }


@pytest.fixture(autouse=True)
def _concise_logging(monkeypatch):
    """Log assertions expect the concise (non-debug) line format."""
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    error_aggregator.reset()
    yield
    error_aggregator.reset()
