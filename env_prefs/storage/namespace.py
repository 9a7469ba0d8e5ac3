"""Environment key namespacing.

Every key written on behalf of an environment has the form
``env:{environment_id}:{key}``. Neither segment is escaped, so an
environment ID containing ``:`` can overlap another environment's prefix
(``a:b`` vs ``a`` with key ``b:...``). Callers are expected to use
identifiers without ``:``.
"""

from __future__ import annotations

from typing import Optional, Set, Tuple

from env_prefs.storage.backend import KeyValueBackend

ENV_PREFIX = "env:"


def env_prefix(environment_id: str) -> str:
    return f"{ENV_PREFIX}{environment_id}:"


def build_key(environment_id: str, key: str) -> str:
    """Build the fully-qualified storage key for an environment preference."""
    return f"{env_prefix(environment_id)}{key}"


def parse_key(full_key: str) -> Optional[Tuple[str, str]]:
    """Split a fully-qualified key into (environment_id, key).

    The environment ID is taken up to the first ``:`` after the prefix.
    Returns None for keys outside the ``env:`` namespace.
    """
    if not full_key.startswith(ENV_PREFIX):
        return None
    environment_id, sep, key = full_key[len(ENV_PREFIX) :].partition(":")
    if not sep:
        return None
    return environment_id, key


def list_keys(backend: KeyValueBackend, environment_id: str) -> Set[str]:
    """Enumerate every stored key belonging to ``environment_id``.

    Scans the whole key space; no index is maintained.
    """
    prefix = env_prefix(environment_id)
    return {key for key in backend.keys() if key.startswith(prefix)}
