"""env-prefs - Configuration system with Pydantic Settings"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import pydantic_settings
from pydantic import Field, field_validator
from pydantic_settings import (
    DotEnvSettingsSource,
    EnvSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "reload_settings",
]

StorageBackendKind = Literal["file", "memory", "none"]


class Settings(pydantic_settings.BaseSettings):
    """Application settings with type-safe validation"""

    # Application settings
    debug: bool = Field(default=False)
    log_level: str = Field(default="WARNING")

    # Storage
    storage_backend: StorageBackendKind = Field(default="file")
    storage_dir: str = Field(default_factory=lambda: str(_resolve_app_dir("data")))

    # Recency limits
    k8s_recent_limit: int = Field(default=8, ge=1)
    gadget_url_recent_limit: int = Field(default=10, ge=1)
    gadget_history_max_entries: int = Field(default=50, ge=1)

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[pydantic_settings.BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        del env_settings, dotenv_settings

        model_case_sensitive = settings_cls.model_config.get("case_sensitive")
        case_sensitive = model_case_sensitive if isinstance(model_case_sensitive, bool) else None

        return (
            init_settings,
            EnvSettingsSource(
                settings_cls,
                env_prefix="ENV_PREFS_",
                case_sensitive=case_sensitive,
            ),
            DotEnvSettingsSource(
                settings_cls,
                env_prefix="ENV_PREFS_",
                env_file=_dotenv_paths(settings_cls),
                case_sensitive=case_sensitive,
            ),
            file_secret_settings,
        )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Unknown log level: {value}")
        return name

    def storage_dir_path(self) -> Path:
        """
        Get the storage directory path as a Path object.

        Returns:
            The storage directory path as a Path object with ~ expanded.
        """
        return Path(self.storage_dir).expanduser()


APP_DIR_NAME = "env-prefs"


def _xdg_base_dir(env_var_name: str, fallback: Path) -> Path:
    env_value = os.getenv(env_var_name)
    if env_value:
        return Path(env_value).expanduser()
    return fallback


def _app_base_dirs(kind: str) -> Path:
    home = Path.home()
    if kind == "config":
        base = _xdg_base_dir("XDG_CONFIG_HOME", home / ".config")
    elif kind == "data":
        base = _xdg_base_dir("XDG_DATA_HOME", home / ".local" / "share")
    else:
        raise ValueError(f"Unsupported app dir kind: {kind}")

    return base / APP_DIR_NAME


def _resolve_app_dir(kind: str) -> Path:
    return _app_base_dirs(kind)


def _dotenv_paths(settings_cls: type[pydantic_settings.BaseSettings]) -> tuple[Path | str, ...]:
    explicit_env_files = settings_cls.model_config.get("env_file")
    if explicit_env_files is not None:
        if isinstance(explicit_env_files, (str, Path)):
            return (explicit_env_files,)
        return tuple(explicit_env_files)

    return (".env", _app_base_dirs("config") / ".env")


settings: Settings = Settings()


def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        The global Settings instance.
    """
    return settings


def reload_settings() -> Settings:
    """
    Reload settings by creating a new Settings instance.

    Returns:
        A new Settings instance with current environment values.
    """
    return Settings()

