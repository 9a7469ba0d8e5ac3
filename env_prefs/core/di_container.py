"""
Dependency Injection Container for env-prefs.

This module provides a centralized DI container using the dependency-injector library
to wire the storage backend, change notifier and preference stores. The container is
configured once at application start and reset at shutdown; consumers receive their
stores from it instead of reaching for module-level instances.

Services:
    - backend: KeyValueBackend selected from settings (file, memory or none)
    - notifier: ChangeNotifier shared by every store
    - accessor: PreferenceAccessor over the backend
    - preferences: EnvironmentPreferences facade
    - configuration: ConfigurationStore for application-wide settings
    - confirmations: ConfirmationBroker for destructive operations

Example:
    >>> from env_prefs.core.di_container import configure_container
    >>> container = configure_container(storage_backend="memory")
    >>> prefs = container.preferences()
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dependency_injector import containers, providers

from env_prefs.core.confirmation import ConfirmationBroker
from env_prefs.core.observer import ChangeNotifier
from env_prefs.core.settings import Settings, get_settings
from env_prefs.preferences.accessor import PreferenceAccessor
from env_prefs.preferences.configuration import ConfigurationStore
from env_prefs.preferences.facade import EnvironmentPreferences
from env_prefs.storage.backend import create_backend


def _storage_dir(storage_path: Optional[Path], settings: Settings) -> Path:
    return Path(storage_path) if storage_path else settings.storage_dir_path()


def _backend_kind(storage_backend: Optional[str], settings: Settings) -> str:
    return storage_backend or settings.storage_backend


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container for env-prefs services.

    Stores are singletons so that every consumer shares one backend and
    one notifier for the lifetime of the application.
    """

    # Configuration
    config = providers.Configuration()

    settings = providers.Singleton(get_settings)

    storage_dir = providers.Callable(_storage_dir, config.storage_path, settings)

    backend_kind = providers.Callable(_backend_kind, config.storage_backend, settings)

    # Storage backend - created on first use
    backend = providers.Singleton(
        create_backend,
        kind=backend_kind,
        storage_dir=storage_dir,
    )

    notifier = providers.Singleton(ChangeNotifier, name="preferences")

    accessor = providers.Singleton(
        PreferenceAccessor,
        backend=backend,
        notifier=notifier,
    )

    preferences = providers.Singleton(
        EnvironmentPreferences,
        accessor=accessor,
        k8s_recent_limit=settings.provided.k8s_recent_limit,
        gadget_url_recent_limit=settings.provided.gadget_url_recent_limit,
        gadget_history_max_entries=settings.provided.gadget_history_max_entries,
    )

    configuration = providers.Singleton(
        ConfigurationStore,
        backend=backend,
        notifier=notifier,
    )

    confirmations = providers.Singleton(ConfirmationBroker)


container = Container()


def configure_container(
    storage_path: Optional[Path] = None,
    storage_backend: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Container:
    """
    Configure the global DI container with runtime values.

    Call this once at startup, before accessing services from the container.

    Args:
        storage_path: Optional custom storage directory path
        storage_backend: Optional backend kind overriding settings ("file", "memory", "none")
        settings: Optional Settings instance replacing the global settings

    Returns:
        Configured Container instance
    """
    container.reset_singletons()
    container.config.set("storage_path", storage_path)
    container.config.set("storage_backend", storage_backend)
    container.settings.reset_override()
    if settings is not None:
        container.settings.override(providers.Object(settings))

    return container


def reset_container() -> None:
    """
    Reset the global container to its initial state.

    Call at shutdown, and between tests. Every store created so far is
    discarded; the next access builds fresh ones.
    """
    container.config.set("storage_path", None)
    container.config.set("storage_backend", None)
    container.settings.reset_override()
    container.reset_singletons()
