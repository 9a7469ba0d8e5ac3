"""Application-wide settings persisted as a single JSON object.

Unlike environment preferences these settings are global, so they live
under the plain ``ig-configuration`` key rather than an ``env:`` key.
Stored values win over schema defaults; keys missing from storage take
their default.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from env_prefs.core.config import ConfigurationSchema, SettingValue, configuration_schema
from env_prefs.core.json_value import encode
from env_prefs.core.observer import ChangeNotifier, PreferenceChange
from env_prefs.storage.backend import KeyValueBackend

logger = logging.getLogger(__name__)

STORAGE_KEY = "ig-configuration"


class ConfigurationStore:
    """Schema-backed settings with persistence.

    Args:
        backend: Key-value storage primitive.
        schema: Settings schema providing defaults.
        notifier: Optional notifier receiving a change after each persist.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        schema: ConfigurationSchema = configuration_schema,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self.backend = backend
        self.schema = schema
        self.notifier = notifier
        self._settings: Dict[str, SettingValue] = self._load()

    def _load(self) -> Dict[str, SettingValue]:
        """Load settings from storage, merged over schema defaults"""
        defaults = self.get_defaults()
        try:
            stored = self.backend.get_item(STORAGE_KEY)
        except OSError as e:
            logger.error(f"Failed to load configuration: {e}")
            return defaults
        if not stored:
            return defaults

        try:
            parsed = json.loads(stored)
        except ValueError as e:
            logger.error(f"Failed to load configuration: {e}")
            return defaults
        if not isinstance(parsed, dict):
            logger.error("Failed to load configuration: stored value is not an object")
            return defaults

        return {**defaults, **parsed}

    def _persist(self) -> None:
        """Write settings to storage; failures are logged, not raised"""
        try:
            self.backend.set_item(STORAGE_KEY, encode(self._settings, STORAGE_KEY))
        except OSError as e:
            logger.error(f"Failed to persist configuration: {e}")
            return
        if self.notifier is not None:
            self.notifier.notify_observers(PreferenceChange(key=STORAGE_KEY, action="set"))

    def get_defaults(self) -> Dict[str, SettingValue]:
        return self.schema.defaults()

    def get(self, key: str) -> Optional[SettingValue]:
        return self._settings.get(key)

    def set(self, key: str, value: SettingValue) -> None:
        """Set a setting value and persist.

        Raises:
            PreferenceEncodeError: If the value is not JSON representable.
        """
        encode(value, key)
        self._settings[key] = value
        self._persist()

    def get_all(self) -> Dict[str, SettingValue]:
        return dict(self._settings)

    def reset(self) -> None:
        """Reset all settings to their defaults"""
        self._settings = self.get_defaults()
        self._persist()

    def reset_key(self, key: str) -> None:
        """Reset one setting to its default; unknown keys are ignored"""
        defaults = self.get_defaults()
        if key in defaults:
            self._settings[key] = defaults[key]
            self._persist()

    def reload(self) -> None:
        """Reload settings from storage"""
        self._settings = self._load()
