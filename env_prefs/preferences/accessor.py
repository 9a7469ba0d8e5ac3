"""Typed access to environment-scoped preferences.

Reads are lenient: a missing key and a value that fails to decode both
come back as absent. Writes are strict: a value outside the JSON variant
raises PreferenceEncodeError and nothing is stored.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Set, Type, TypeVar, overload

from pydantic import TypeAdapter, ValidationError

from env_prefs.core.json_value import JsonValue, decode, encode
from env_prefs.core.observer import ChangeNotifier, PreferenceChange
from env_prefs.storage.backend import KeyValueBackend
from env_prefs.storage.namespace import build_key, list_keys

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PreferenceAccessor:
    """Get/set JSON preferences under ``env:{environment_id}:{key}``.

    Args:
        backend: Key-value storage primitive.
        notifier: Receives a PreferenceChange after every write or removal.
    """

    def __init__(self, backend: KeyValueBackend, notifier: Optional[ChangeNotifier] = None):
        self.backend = backend
        self.notifier = notifier or ChangeNotifier()

    @overload
    def get(self, environment_id: str, key: str) -> Optional[JsonValue]: ...

    @overload
    def get(self, environment_id: str, key: str, expected: Type[T]) -> Optional[T]: ...

    def get(self, environment_id: str, key: str, expected: Any = None) -> Any:
        """Read a preference.

        Args:
            environment_id: Environment the preference belongs to.
            key: Preference key within the environment.
            expected: Optional type the decoded value must validate as.

        Returns:
            The decoded value, or None if absent, malformed, or not valid
            for ``expected``.
        """
        full_key = build_key(environment_id, key)
        raw = self.backend.get_item(full_key)
        if raw is None:
            return None

        try:
            value = decode(raw)
        except ValueError:
            logger.debug(f"Ignoring malformed value stored under {full_key}")
            return None

        if expected is None:
            return value

        try:
            return TypeAdapter(expected).validate_python(value)
        except ValidationError:
            logger.debug(f"Ignoring value under {full_key}: not a valid {expected!r}")
            return None

    def set(self, environment_id: str, key: str, value: Any) -> str:
        """Serialize and store a preference, then notify observers.

        Returns:
            The fully-qualified key written.

        Raises:
            PreferenceEncodeError: If the value is not JSON representable.
        """
        full_key = build_key(environment_id, key)
        raw = encode(value, full_key)
        self.backend.set_item(full_key, raw)
        self.notifier.notify_observers(PreferenceChange(key=full_key, action="set"))
        return full_key

    def remove(self, full_key: str) -> None:
        """Remove a fully-qualified key and notify observers."""
        self.backend.remove_item(full_key)
        self.notifier.notify_observers(PreferenceChange(key=full_key, action="remove"))

    def keys(self, environment_id: str) -> Set[str]:
        """All fully-qualified keys stored for an environment."""
        return list_keys(self.backend, environment_id)
