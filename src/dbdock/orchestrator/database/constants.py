# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Constants for PostgreSQL containers."""

from __future__ import annotations

POSTGRES_IMAGE = "postgres"
DEFAULT_VERSION = "15"
DEFAULT_USER = "postgres"

# Host port probed from when the caller keeps the default
DEFAULT_PORT = "5432"
CONTAINER_PORT = "5432"
CONTAINER_PORT_KEY = f"{CONTAINER_PORT}/tcp"

# Environment variables understood by the postgres image
ENV_PASSWORD = "POSTGRES_PASSWORD"
ENV_USER = "POSTGRES_USER"
ENV_DB = "POSTGRES_DB"
ENV_TIMEZONE = "TZ"
ENV_LOCALE = "LANG"

# Paths inside the container
DATA_DIR = "/var/lib/postgresql/data"
SSL_CERT_PATH = "/var/lib/postgresql/server.crt"
SSL_KEY_PATH = "/var/lib/postgresql/server.key"
SSL_ROOT_CERT_PATH = "/var/lib/postgresql/root.crt"
INIT_SCRIPT_DIR = "/docker-entrypoint-initdb.d"

READINESS_COMMAND = ("pg_isready",)

URI_SCHEME = "postgresql"
