"""Removal of everything stored for an environment."""

from __future__ import annotations

import logging

from env_prefs.preferences.accessor import PreferenceAccessor

logger = logging.getLogger(__name__)


def cleanup_environment(accessor: PreferenceAccessor, environment_id: str) -> int:
    """Delete every preference key belonging to ``environment_id``.

    Call once when an environment is permanently removed. Unknown or
    already-cleaned environments are a no-op.

    Returns:
        Number of keys removed.
    """
    keys = sorted(accessor.keys(environment_id))
    for key in keys:
        accessor.remove(key)
    logger.info(f"Cleaned up {len(keys)} keys for environment {environment_id}")
    return len(keys)
