"""
This module contains shared fixtures for testing.
"""

import pytest

from zoneflect import ClassRegistry, DecoratorGenerator
from zoneflect._utils import config


@pytest.fixture
def registry() -> ClassRegistry:
    """A fresh registry, isolated from the process-wide one."""
    return ClassRegistry()


@pytest.fixture
def generator(registry: ClassRegistry) -> DecoratorGenerator:
    """A default-zone generator writing into the `registry` fixture."""
    return DecoratorGenerator(registry=registry)


@pytest.fixture(autouse=True)
def restore_options():
    """Restore package options changed by a test."""
    snapshot = {
        key: list(value) if isinstance(value, list) else value
        for key, value in config._settings.items()
    }
    yield
    config._settings.clear()
    config._settings.update(snapshot)
