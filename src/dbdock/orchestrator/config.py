# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""dbdock settings.

Settings are read from (highest to lowest priority):
  1. ``DBDOCK_*`` environment variables
  2. ``$XDG_CONFIG_HOME/dbdock/dbdock.conf``  (user, ``~/.config`` by default)
  3. ``/etc/dbdock/dbdock.conf``              (system)
  4. built-in defaults

Config files are INI with a single ``[dbdock]`` section::

    [dbdock]
    docker_binary = podman
    readiness_attempts = 20
"""

from __future__ import annotations

import configparser
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .operations import OperationError

logger = logging.getLogger(__name__)

SECTION = "dbdock"
ENV_PREFIX = "DBDOCK_"

SYSTEM_CONFIG_PATH = Path("/etc/dbdock/dbdock.conf")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(OperationError):
    """A config file or environment variable holds an invalid value."""


def user_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "dbdock" / "dbdock.conf"


def default_config_paths() -> list[Path]:
    """Config files in ascending priority."""
    return [SYSTEM_CONFIG_PATH, user_config_path()]


class IniConfigSettingsSource(PydanticBaseSettingsSource):
    """Reads the ``[dbdock]`` section of each INI file; later files win.

    Missing files are skipped.  Values are passed through as strings and
    converted by the model.
    """

    def __init__(self, settings_cls: type[BaseSettings], paths: Sequence[Path] | None = None):
        super().__init__(settings_cls)
        self.paths = list(paths) if paths is not None else default_config_paths()
        self._values: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        values: dict[str, str] = {}
        for path in self.paths:
            # Raw values: '%' is common in paths and has no special meaning here
            parser = configparser.ConfigParser(interpolation=None)
            try:
                if not parser.read(path):
                    continue
                if parser.has_section(SECTION):
                    values.update(parser.items(SECTION))
            except configparser.Error as e:
                raise ConfigError(
                    f"Cannot read config file {path}: {str(e).splitlines()[0]}",
                    hint=f"Fix or remove {path}",
                ) from e
            logger.debug("Loaded config file %s", path)
        return values

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        if self._values is None:
            self._values = self._load()
        return self._values


class DbdockConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True, extra="forbid")

    docker_binary: str = "docker"
    default_version: str = "15"
    readiness_attempts: int = Field(default=10, ge=1)
    readiness_interval: float = Field(default=0.5, ge=0)
    port_probe_attempts: int = Field(default=100, ge=1)
    public_ip_lookup: bool = True
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, IniConfigSettingsSource(settings_cls)


def _describe(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        key = ".".join(str(part) for part in err["loc"]) or "?"
        if err["type"] == "extra_forbidden":
            problems.append(f"Unknown setting '{key}' in [{SECTION}]")
        else:
            problems.append(f"Invalid setting '{key}': {err['msg']}")
    return "; ".join(problems)


def load_config() -> DbdockConfig:
    """Load settings from config files and the environment.

    Raises:
        ConfigError: On an unreadable config file, an unknown key or a
            value of the wrong type.
    """
    try:
        return DbdockConfig()
    except ValidationError as e:
        raise ConfigError(
            _describe(e),
            hint=f"Check {ENV_PREFIX}* variables and {', '.join(map(str, default_config_paths()))}",
        ) from e
