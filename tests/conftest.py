"""Shared fixtures for template tests."""

from __future__ import annotations

import pytest
from sample_engines import GreetingEngine, UpperEngine

from asset_templates.libs import LibraryRegistry
from asset_templates.registry import EngineRegistry


@pytest.fixture
def libs() -> LibraryRegistry:
    """Isolated library registry."""
    return LibraryRegistry()


@pytest.fixture
def engines() -> EngineRegistry:
    """Engine registry with an ``upper`` and a ``greeting`` engine."""
    registry = EngineRegistry()
    registry.register("upper", UpperEngine, extensions=[".up", "UPPER"])
    registry.register("greeting", GreetingEngine, extensions=[".greet"])
    return registry
