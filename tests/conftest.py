"""Shared fixtures for env-prefs tests"""

import pytest

from env_prefs.core.observer import ChangeNotifier, RecordingObserver
from env_prefs.preferences.accessor import PreferenceAccessor
from env_prefs.preferences.facade import EnvironmentPreferences
from env_prefs.storage.backend import InMemoryBackend


@pytest.fixture
def backend():
    """Empty in-memory backend."""
    return InMemoryBackend()


@pytest.fixture
def notifier():
    return ChangeNotifier("test")


@pytest.fixture
def recorder(notifier):
    """Observer registered on the test notifier."""
    observer = RecordingObserver("recorder")
    notifier.register_observer(observer)
    return observer


@pytest.fixture
def accessor(backend, notifier):
    return PreferenceAccessor(backend, notifier)


@pytest.fixture
def prefs(accessor):
    """Facade with the default limits (8 resources, 10 URLs, 50 runs)."""
    return EnvironmentPreferences(accessor)
