# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Database container options and validation.

:class:`DatabaseOptions` describes one container launch.  There are two
ways to build one:

- :func:`default_options` for quick mode (``dbdock create postgres NAME``):
  a generated password and the container name as the database name.
- :func:`parse_options` for custom mode (``dbdock create-custom``): the
  CLI passes only the keys the user explicitly set, everything else
  gets :data:`CUSTOM_DEFAULTS`.

Data flow
---------
1. CLI collects flags into a plain dict, dropping unset ones.
2. :func:`parse_options`:
   a. Rejects unknown keys.
   b. Fills in defaults for missing keys.
   c. Type-checks every value.
   d. Validates the SSL mode.
   e. Returns a :class:`DatabaseOptions`.
3. The create pipeline re-validates via :func:`validate_options` before
   touching the engine, so programmatic callers get the same checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from .database.constants import DEFAULT_PORT, DEFAULT_USER, DEFAULT_VERSION, POSTGRES_IMAGE
from .network import generate_password
from .operations import OptionValidationError

SSL_MODES = ("disable", "require", "verify-ca", "verify-full")

CUSTOM_DEFAULTS: dict[str, Any] = {
    "version": DEFAULT_VERSION,
    "port": DEFAULT_PORT,
    "password": "postgres",
    "username": DEFAULT_USER,
    "database": "postgres",
    "volume": "",
    "memory": "",
    "cpu": "",
    "timezone": "UTC",
    "locale": "en_US.utf8",
    "networks": [],
    "init_scripts": [],
    "extra_mounts": [],
    "environment": {},
    "ssl_mode": "disable",
    "ssl_cert": "",
    "ssl_key": "",
    "ssl_root_cert": "",
}

_LIST_KEYS = ("networks", "init_scripts", "extra_mounts")


@dataclass
class DatabaseOptions:
    """Configuration for one database container.

    ``port`` is the only field the orchestrator writes: it is replaced
    by the effective port when the default one is already taken.
    """

    name: str
    version: str = DEFAULT_VERSION
    port: str = DEFAULT_PORT
    password: str = "postgres"
    username: str = DEFAULT_USER
    database: str = "postgres"
    volume: str = ""
    memory: str = ""
    cpu: str = ""
    timezone: str = "UTC"
    locale: str = "en_US.utf8"
    networks: list[str] = field(default_factory=lambda: list[str]())
    init_scripts: list[str] = field(default_factory=lambda: list[str]())
    extra_mounts: list[str] = field(default_factory=lambda: list[str]())
    environment: dict[str, str] = field(default_factory=lambda: dict[str, str]())
    ssl_mode: str = "disable"
    ssl_cert: str = ""
    ssl_key: str = ""
    ssl_root_cert: str = ""

    @property
    def image(self) -> str:
        return f"{POSTGRES_IMAGE}:{self.version}"

    @property
    def ssl_enabled(self) -> bool:
        """SSL material is mounted only with a mode other than ``disable`` and both cert and key."""
        return self.ssl_mode != "disable" and bool(self.ssl_cert) and bool(self.ssl_key)


def default_name(now: datetime | None = None) -> str:
    """Container name used when quick mode is given an empty name."""
    return "postgres-" + (now or datetime.now()).strftime("%Y%m%d-%H%M%S")


def default_options(name: str, version: str = DEFAULT_VERSION) -> DatabaseOptions:
    """Quick-mode options: generated password, database named after the container."""
    if not name:
        name = default_name()
    return DatabaseOptions(
        name=name,
        version=version,
        password=generate_password(),
        database=name,
    )


def validate_options(opts: DatabaseOptions) -> None:
    """Check the invariants every create must satisfy.

    Raises:
        OptionValidationError: On an empty name or unknown SSL mode.
    """
    if not opts.name:
        raise OptionValidationError(
            "Container name is required",
            hint="Pass one with [bold]--name[/bold]",
        )
    if opts.ssl_mode not in SSL_MODES:
        raise OptionValidationError(
            f"Invalid SSL mode '{opts.ssl_mode}' (expected one of: {', '.join(SSL_MODES)})"
        )


def parse_options(raw: dict[str, Any]) -> DatabaseOptions:
    """Parse and validate a custom-mode option dict into :class:`DatabaseOptions`.

    - Unknown keys are rejected.
    - Missing keys get their :data:`CUSTOM_DEFAULTS` value.
    - Type mismatches are rejected.
    - ``name`` must be present and non-empty.

    Raises:
        OptionValidationError: On validation failure.
    """
    known = {f.name for f in fields(DatabaseOptions)}
    unknown = set(raw.keys()) - known
    if unknown:
        raise OptionValidationError(f"Unknown options: {', '.join(sorted(unknown))}")

    merged: dict[str, Any] = {"name": "", **CUSTOM_DEFAULTS, **raw}

    for key, value in merged.items():
        if key in _LIST_KEYS:
            if not isinstance(value, list):
                raise OptionValidationError(
                    f"Option '{key}' must be a list, got {type(value).__name__}"
                )
            for i, item in enumerate(value):  # type: ignore[arg-type]
                if not isinstance(item, str):
                    raise OptionValidationError(
                        f"{key}[{i}] must be a string, got {type(item).__name__}"
                    )
        elif key == "environment":
            if not isinstance(value, dict) or not all(
                isinstance(k, str) and isinstance(v, str)
                for k, v in value.items()  # type: ignore[union-attr]
            ):
                raise OptionValidationError("Option 'environment' must map strings to strings")
        elif key == "port" and isinstance(value, int) and not isinstance(value, bool):
            merged[key] = str(value)
        elif not isinstance(value, str):
            raise OptionValidationError(
                f"Option '{key}' must be a string, got {type(value).__name__}"
            )

    for key in _LIST_KEYS:
        merged[key] = list(merged[key])
    merged["environment"] = dict(merged["environment"])

    opts = DatabaseOptions(**merged)
    validate_options(opts)
    if not opts.port.isdigit() or not 0 < int(opts.port) < 65536:
        raise OptionValidationError(f"Invalid port '{opts.port}'")
    return opts


def parse_env_pairs(pairs: list[str]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a dict; later keys win."""
    env: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise OptionValidationError(f"Invalid environment variable '{pair}' (expected KEY=VALUE)")
        env[key] = value
    return env


def split_values(values: list[str] | None) -> list[str]:
    """Flatten repeatable, comma-joined flag values, keeping order."""
    result: list[str] = []
    for value in values or []:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result
