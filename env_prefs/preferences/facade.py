"""Facade over environment-scoped preferences.

Bundles the accessor, recency lists, run history and cleanup behind the
operations the desktop UI calls: recently used Kubernetes resources,
recently used gadget URLs, gadget run history and environment removal.

Example:
    >>> prefs = EnvironmentPreferences(PreferenceAccessor(InMemoryBackend()))
    >>> prefs.save_k8s_recent("e1", "namespace", "kube-system")
    >>> prefs.get_k8s_recents("e1", "namespace")
    ['kube-system']
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Set, Union

from env_prefs.preferences.accessor import PreferenceAccessor
from env_prefs.preferences.cleanup import cleanup_environment
from env_prefs.preferences.history import (
    DEFAULT_MAX_ENTRIES,
    GADGET_HISTORY_KEY,
    GadgetRunRequest,
    History,
)
from env_prefs.preferences.recents import GADGET_URL_RECENT_KEY, RecencyList, k8s_recent_key

K8S_RECENT_LIMIT = 8
GADGET_URL_RECENT_LIMIT = 10


class EnvironmentPreferences:
    """Per-environment preferences and history.

    Args:
        accessor: Typed accessor over the storage backend.
        k8s_recent_limit: Cap for Kubernetes resource recents.
        gadget_url_recent_limit: Cap for gadget URL recents.
        gadget_history_max_entries: Default cap for gadget run history.
    """

    def __init__(
        self,
        accessor: PreferenceAccessor,
        k8s_recent_limit: int = K8S_RECENT_LIMIT,
        gadget_url_recent_limit: int = GADGET_URL_RECENT_LIMIT,
        gadget_history_max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        self.accessor = accessor
        self.recents = RecencyList(accessor)
        self.history = History(accessor)
        self.k8s_recent_limit = k8s_recent_limit
        self.gadget_url_recent_limit = gadget_url_recent_limit
        self.gadget_history_max_entries = gadget_history_max_entries

    # Generic preferences

    def get(self, environment_id: str, key: str) -> Any:
        return self.accessor.get(environment_id, key)

    def set(self, environment_id: str, key: str, value: Any) -> None:
        self.accessor.set(environment_id, key, value)

    # Kubernetes resource recents

    def get_k8s_recents(self, environment_id: str, resource_type: str) -> List[str]:
        return self.recents.get_recents(environment_id, k8s_recent_key(resource_type))

    def save_k8s_recent(self, environment_id: str, resource_type: str, value: str) -> None:
        self.recents.save_recent(
            environment_id, k8s_recent_key(resource_type), value, self.k8s_recent_limit
        )

    def clear_k8s_recents(self, environment_id: str, resource_type: str) -> None:
        self.recents.clear_recents(environment_id, k8s_recent_key(resource_type))

    # Gadget URL recents

    def get_gadget_url_recents(self, environment_id: str) -> List[str]:
        return self.recents.get_recents(environment_id, GADGET_URL_RECENT_KEY)

    def save_gadget_url_recent(self, environment_id: str, url: str) -> None:
        self.recents.save_recent(
            environment_id, GADGET_URL_RECENT_KEY, url, self.gadget_url_recent_limit
        )

    # Gadget run history

    def get_gadget_history(self, environment_id: str) -> List[GadgetRunRequest]:
        return self.history.get_history(environment_id, GADGET_HISTORY_KEY)

    def add_gadget_to_history(
        self,
        environment_id: str,
        request: Optional[Union[GadgetRunRequest, Mapping[str, Any]]],
        max_entries: Optional[int] = None,
    ) -> List[GadgetRunRequest]:
        """Record a gadget run, moving an identical earlier run to the front."""
        return self.history.add_record(
            environment_id,
            request,
            history_key=GADGET_HISTORY_KEY,
            max_entries=self.gadget_history_max_entries if max_entries is None else max_entries,
        )

    # Environment lifecycle

    def list_environment_keys(self, environment_id: str) -> Set[str]:
        return self.accessor.keys(environment_id)

    def cleanup_environment(self, environment_id: str) -> int:
        return cleanup_environment(self.accessor, environment_id)
