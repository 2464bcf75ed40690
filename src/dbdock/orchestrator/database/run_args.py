# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Helpers for building the ``docker run`` argument vector."""

from __future__ import annotations

from ..database_options import DatabaseOptions
from .constants import (
    CONTAINER_PORT,
    DATA_DIR,
    ENV_DB,
    ENV_LOCALE,
    ENV_PASSWORD,
    ENV_TIMEZONE,
    ENV_USER,
    INIT_SCRIPT_DIR,
    SSL_CERT_PATH,
    SSL_KEY_PATH,
    SSL_ROOT_CERT_PATH,
)


def base_run_args(opts: DatabaseOptions) -> list[str]:
    """Arguments applied to every new database container.

    Name, credentials, timezone/locale, the port mapping and detached
    mode, followed by any free-form environment variables.
    """
    args = [
        "--name", opts.name,
        "-e", f"{ENV_PASSWORD}={opts.password}",
        "-e", f"{ENV_USER}={opts.username}",
        "-e", f"{ENV_DB}={opts.database}",
        "-e", f"{ENV_TIMEZONE}={opts.timezone}",
        "-e", f"{ENV_LOCALE}={opts.locale}",
        "-p", f"{opts.port}:{CONTAINER_PORT}",
        "-d",
    ]
    for key, value in opts.environment.items():
        args += ["-e", f"{key}={value}"]
    return args


def resource_args(opts: DatabaseOptions) -> list[str]:
    """Data volume, memory/CPU limits, networks and extra mounts."""
    args: list[str] = []
    if opts.volume:
        args += ["-v", f"{opts.volume}:{DATA_DIR}"]
    if opts.memory:
        args += ["--memory", opts.memory]
    if opts.cpu:
        args += ["--cpus", opts.cpu]
    for network in opts.networks:
        args += ["--network", network]
    for mount in opts.extra_mounts:
        args += ["-v", mount]
    return args


def ssl_mounts(opts: DatabaseOptions) -> list[str]:
    """Certificate mounts, present only when SSL is enabled with both cert and key."""
    if not opts.ssl_enabled:
        return []
    args = [
        "-v", f"{opts.ssl_cert}:{SSL_CERT_PATH}",
        "-v", f"{opts.ssl_key}:{SSL_KEY_PATH}",
    ]
    if opts.ssl_root_cert:
        args += ["-v", f"{opts.ssl_root_cert}:{SSL_ROOT_CERT_PATH}"]
    return args


def init_script_mounts(scripts: list[str]) -> list[str]:
    """Read-only mounts for init scripts.

    The entrypoint runs ``*.sql`` files in alphabetical order, so each
    script is mounted as ``init_<index>.sql`` to keep the given order.
    Zero-padding keeps that true past ten scripts.
    """
    width = max(1, len(str(len(scripts) - 1)))
    args: list[str] = []
    for i, script in enumerate(scripts):
        args += ["-v", f"{script}:{INIT_SCRIPT_DIR}/init_{i:0{width}d}.sql:ro"]
    return args


def build_run_args(opts: DatabaseOptions) -> list[str]:
    """Full argument vector following ``docker run``; the image comes last."""
    return [
        *base_run_args(opts),
        *resource_args(opts),
        *ssl_mounts(opts),
        *init_script_mounts(opts.init_scripts),
        opts.image,
    ]
