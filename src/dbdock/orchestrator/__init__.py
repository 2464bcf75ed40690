# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Container lifecycle orchestration - public API re-exports."""

from .config import DbdockConfig, load_config
from .database.service import DatabaseService
from .database.summary import ConnectionSummary, ContainerSummary
from .database_options import DatabaseOptions, default_options, parse_options
from .docker_client import ContainerEngine, DockerEngine
from .operations import OperationError, OperationReporter

__all__ = [
    "ConnectionSummary",
    "ContainerEngine",
    "ContainerSummary",
    "DatabaseOptions",
    "DatabaseService",
    "DbdockConfig",
    "DockerEngine",
    "OperationError",
    "OperationReporter",
    "default_options",
    "load_config",
    "parse_options",
]
