"""env-prefs - Core module exports"""

from .equality import deep_equal
from .exceptions import ConfirmationError, PreferenceEncodeError, PreferenceError
from .json_value import JsonValue, to_json_value
from .observer import ChangeNotifier, ChangeObserver, PreferenceChange, RecordingObserver

__all__ = [
    # Values
    "JsonValue",
    "to_json_value",
    "deep_equal",
    # Errors
    "PreferenceError",
    "PreferenceEncodeError",
    "ConfirmationError",
    # Notification
    "ChangeNotifier",
    "ChangeObserver",
    "PreferenceChange",
    "RecordingObserver",
]
