"""Shared fixtures: seeded settings, registry and dispatcher."""

from __future__ import annotations

import pytest

from switchboard.capabilities.registry import CapabilityRegistry
from switchboard.config.models import ServerSettings
from switchboard.server.dispatcher import Dispatcher


@pytest.fixture
def settings() -> ServerSettings:
    return ServerSettings(weather_seed=7, heartbeat_interval=0.01)


@pytest.fixture
def registry(settings: ServerSettings) -> CapabilityRegistry:
    return CapabilityRegistry.default(settings)


@pytest.fixture
def dispatcher(registry: CapabilityRegistry, settings: ServerSettings) -> Dispatcher:
    return Dispatcher(registry, settings, transport="stdio")


