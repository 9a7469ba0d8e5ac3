"""env-prefs - Storage backends and key namespacing"""

from .backend import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    NullBackend,
    create_backend,
)
from .namespace import ENV_PREFIX, build_key, list_keys, parse_key

__all__ = [
    "KeyValueBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "NullBackend",
    "create_backend",
    "ENV_PREFIX",
    "build_key",
    "parse_key",
    "list_keys",
]
