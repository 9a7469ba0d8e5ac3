"""Bounded, duplicate-free, most-recent-first lists of strings."""

from __future__ import annotations

from typing import List

from env_prefs.preferences.accessor import PreferenceAccessor

K8S_RECENT_PREFIX = "k8s-recent:"
GADGET_URL_RECENT_KEY = "gadget-url-recent"


def k8s_recent_key(resource_type: str) -> str:
    """Preference key for recents of a Kubernetes resource type (namespace, pod, ...)."""
    return f"{K8S_RECENT_PREFIX}{resource_type}"


class RecencyList:
    """Recency lists stored as one JSON array per preference key."""

    def __init__(self, accessor: PreferenceAccessor):
        self.accessor = accessor

    def get_recents(self, environment_id: str, list_key: str) -> List[str]:
        """Return the list, most recent first. Absent or malformed lists are empty."""
        return self.accessor.get(environment_id, list_key, List[str]) or []

    def save_recent(self, environment_id: str, list_key: str, value: str, cap: int) -> None:
        """Move ``value`` to the front, dropping duplicates and anything past ``cap``.

        Blank values are ignored.
        """
        if not value or not value.strip():
            return

        recents = self.get_recents(environment_id, list_key)
        updated = [value, *(v for v in recents if v != value)][:cap]
        self.accessor.set(environment_id, list_key, updated)

    def clear_recents(self, environment_id: str, list_key: str) -> None:
        self.accessor.set(environment_id, list_key, [])
