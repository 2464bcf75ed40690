# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Operation errors and progress reporting.

Every failure an orchestrator operation can surface derives from
:class:`OperationError`.  Errors carry an optional ``hint`` that the
CLI prints underneath the message (e.g. the command that fixes it).

Progress messages go through an :class:`OperationReporter`.  The base
reporter forwards to :mod:`logging`; the CLI supplies one that writes
to the terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class OperationError(Exception):
    """An operation could not complete."""

    def __init__(self, message: str, hint: str | None = None):
        super().__init__(message)
        self.hint = hint


class OptionValidationError(OperationError):
    """Raised when database options fail validation."""


class EngineNotFound(OperationError):
    """The container engine binary is not on ``PATH``."""

    def __init__(self, binary: str):
        super().__init__(
            f"{binary} is not installed or not on PATH",
            hint="Install Docker: https://docs.docker.com/engine/install/",
        )
        self.binary = binary


class AlreadyExists(OperationError):
    def __init__(self, name: str):
        super().__init__(
            f"Container '{name}' already exists",
            hint=f"Run: [bold]dbdock remove {name}[/bold] to remove it first",
        )
        self.name = name


class NotFound(OperationError):
    def __init__(self, name: str):
        super().__init__(f"Container '{name}' does not exist")
        self.name = name


class AlreadyRunning(OperationError):
    def __init__(self, name: str):
        super().__init__(f"Container '{name}' is already running")
        self.name = name


class AlreadyStopped(OperationError):
    def __init__(self, name: str):
        super().__init__(f"Container '{name}' is already stopped")
        self.name = name


class NoAvailablePort(OperationError):
    def __init__(self, start: int, attempts: int):
        super().__init__(
            f"No available ports found in range {start}-{start + attempts - 1}",
            hint="Pass an explicit port with [bold]--port[/bold]",
        )
        self.start = start
        self.attempts = attempts


class ReadinessTimeout(OperationError):
    """The database never answered its readiness probe.

    The container is left in place so it can be inspected.
    """

    def __init__(self, name: str, attempts: int):
        super().__init__(
            f"Timeout waiting for '{name}' to be ready after {attempts} attempts",
            hint=f"Check the logs: [bold]docker logs {name}[/bold]",
        )
        self.name = name
        self.attempts = attempts


class EngineInvocationFailed(OperationError):
    """The engine exited non-zero; ``message`` carries its error output."""

    def __init__(
        self,
        message: str,
        args: Sequence[str] = (),
        returncode: int | None = None,
    ):
        super().__init__(message)
        self.command = list(args)
        self.returncode = returncode


class OperationReporter:
    """Receives progress messages from a running operation."""

    def info(self, msg: str) -> None:
        logger.info(msg)

    def dim(self, msg: str) -> None:
        logger.debug(msg)

    def warning(self, msg: str) -> None:
        logger.warning(msg)

    def success(self, msg: str) -> None:
        logger.info(msg)
