"""Observer pattern for preference change notification.

Writes to the preference store publish a PreferenceChange to every
registered observer so that reactive layers in the same process can
refresh without polling.

Key concepts:
- ChangeObserver: Protocol for objects that receive change notifications
- ChangeNotifier: Process-scoped registry that dispatches notifications
- RecordingObserver: Concrete observer that records every change it sees

Notifications never leave the running process. Two processes sharing the
same backing file do not observe each other's writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Literal, Protocol, Union, runtime_checkable

logger = logging.getLogger(__name__)

ChangeAction = Literal["set", "remove"]


@dataclass(frozen=True)
class PreferenceChange:
    """A single change to a stored key.

    Attributes:
        key: Fully-qualified storage key that changed.
        action: Whether the key was written or removed.
        timestamp: When the change was dispatched (UTC).
    """

    key: str
    action: ChangeAction = "set"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@runtime_checkable
class ChangeObserver(Protocol):
    """Protocol for change observers."""

    def on_change(self, event: PreferenceChange) -> None:
        """Handle a change notification.

        Args:
            event: The change that was just written.
        """
        ...


ObserverLike = Union[ChangeObserver, Callable[[PreferenceChange], None]]


class ChangeNotifier:
    """Observer registry with synchronous, best-effort dispatch.

    Observers are notified in registration order after the write has
    completed. Observer exceptions are caught and logged, preventing one
    faulty observer from failing the write or starving the others.

    Thread safety: NOT thread-safe (documented limitation).
    Suitable for a single UI thread or event loop.

    Args:
        name: Name of the notifier (used in log messages).
    """

    def __init__(self, name: str = "preferences") -> None:
        self.name = name
        self._observers: list[ObserverLike] = []

    def register_observer(self, observer: ObserverLike) -> None:
        """Register an observer; registering twice has no effect."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: ObserverLike) -> None:
        """Unregister an observer. Safe to call even if not registered."""
        if observer in self._observers:
            self._observers.remove(observer)

    def notify_observers(self, event: PreferenceChange) -> None:
        """Dispatch ``event`` to every registered observer."""
        for observer in list(self._observers):
            try:
                if isinstance(observer, ChangeObserver):
                    observer.on_change(event)
                else:
                    observer(event)
            except Exception:
                logger.exception(f"Observer failed handling change to {event.key} on {self.name}")

    @property
    def observer_count(self) -> int:
        """Number of registered observers."""
        return len(self._observers)


@dataclass(eq=False)
class RecordingObserver:
    """Observer that records every change it receives.

    Args:
        name: Name of the observer.
        prefix: Only record keys starting with this prefix.
    """

    name: str
    prefix: str = ""
    _changes: list[PreferenceChange] = field(default_factory=list)

    def on_change(self, event: PreferenceChange) -> None:
        if event.key.startswith(self.prefix):
            self._changes.append(event)

    def get_changes(self) -> list[PreferenceChange]:
        """Return a copy of the recorded changes."""
        return self._changes.copy()

    @property
    def keys(self) -> list[str]:
        return [change.key for change in self._changes]

    def clear(self) -> None:
        self._changes.clear()
