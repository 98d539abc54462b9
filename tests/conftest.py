"""Shared fixtures for platform adapter tests."""

import pytest
from platform_adapter import accessor
from platform_adapter.config import ENV_PLATFORM_SUFFIX
from platform_adapter.config import ENV_SERIALIZE_LOADER
from platform_adapter.config import ENV_STRATEGIES
from platform_adapter.testing import RecordingModuleLoader


@pytest.fixture
def fresh_accessor(monkeypatch):
    """Process-wide accessor with no default instance, no override and a clean environment."""
    monkeypatch.setattr(accessor, "_default_resolver", None)
    monkeypatch.setattr(accessor, "_override_resolver", None)
    for var in (ENV_STRATEGIES, ENV_PLATFORM_SUFFIX, ENV_SERIALIZE_LOADER):
        monkeypatch.delenv(var, raising=False)
    return accessor


@pytest.fixture
def recording_loader():
    """Spy loader delegating to importlib."""
    return RecordingModuleLoader()
