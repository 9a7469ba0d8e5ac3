"""env-prefs - Environment-scoped preferences and recency history"""

from env_prefs.core.equality import deep_equal
from env_prefs.core.exceptions import (
    ConfirmationError,
    PreferenceEncodeError,
    PreferenceError,
)
from env_prefs.core.observer import ChangeNotifier, PreferenceChange
from env_prefs.preferences.facade import EnvironmentPreferences

__version__ = "0.1.0"
__all__ = [
    "ChangeNotifier",
    "ConfirmationError",
    "EnvironmentPreferences",
    "PreferenceChange",
    "PreferenceEncodeError",
    "PreferenceError",
    "deep_equal",
]
