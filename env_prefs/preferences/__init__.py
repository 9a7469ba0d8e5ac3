"""env-prefs - Environment-scoped preferences, recents and history"""

from .accessor import PreferenceAccessor
from .cleanup import cleanup_environment
from .configuration import ConfigurationStore
from .facade import EnvironmentPreferences
from .history import GadgetRunRequest, History
from .recents import RecencyList, k8s_recent_key

__all__ = [
    "PreferenceAccessor",
    "RecencyList",
    "History",
    "GadgetRunRequest",
    "EnvironmentPreferences",
    "ConfigurationStore",
    "cleanup_environment",
    "k8s_recent_key",
]
