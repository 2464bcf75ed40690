# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Creation pipeline steps: validate options, engine and name."""

from __future__ import annotations

from ...database_options import validate_options
from ...docker_client import DockerError
from ...operations import AlreadyExists, EngineInvocationFailed, EngineNotFound
from ..contexts import CreateContext
from . import create_pipeline


@create_pipeline.step(order=-500)
def validate(ctx: CreateContext) -> None:
    """Reject invalid options before anything reaches the engine."""
    validate_options(ctx.opts)


@create_pipeline.step(order=-400)
def require_engine(ctx: CreateContext) -> None:
    """Check that the engine binary can be found."""
    if not ctx.engine.is_available():
        raise EngineNotFound(ctx.config.docker_binary)


@create_pipeline.step(order=-300)
def validate_not_exists(ctx: CreateContext) -> None:
    """Check that a container with this name doesn't already exist."""
    try:
        exists, _running = ctx.engine.container_status(ctx.name)
    except DockerError as e:
        raise EngineInvocationFailed(
            f"Failed to query container '{ctx.name}': {e}", e.command, e.returncode
        ) from e
    if exists:
        raise AlreadyExists(ctx.name)
