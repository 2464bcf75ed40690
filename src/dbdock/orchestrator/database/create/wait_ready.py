# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Creation pipeline step: wait for the database to accept connections."""

from __future__ import annotations

import logging
import time

from ...docker_client import DockerError
from ...operations import EngineInvocationFailed, ReadinessTimeout
from ..constants import READINESS_COMMAND
from ..contexts import CreateContext
from . import create_pipeline

logger = logging.getLogger(__name__)


@create_pipeline.step(order=100)
def wait_ready(ctx: CreateContext) -> None:
    """Poll ``pg_isready`` inside the container until it succeeds.

    Gives up after ``readiness_attempts`` probes spaced by
    ``readiness_interval`` seconds.  On timeout the container is left
    running so it can be inspected.
    """
    ctx.info("Waiting for the database to be ready...")
    attempts = ctx.config.readiness_attempts
    for attempt in range(1, attempts + 1):
        try:
            ready = ctx.engine.exec_probe(ctx.name, READINESS_COMMAND)
        except DockerError as e:
            raise EngineInvocationFailed(
                f"Readiness probe failed to run: {e}", e.command, e.returncode
            ) from e
        if ready:
            logger.debug("%s ready after %d probe(s)", ctx.name, attempt)
            return
        logger.debug("%s not ready (probe %d/%d)", ctx.name, attempt, attempts)
        if attempt < attempts:
            time.sleep(ctx.config.readiness_interval)
    raise ReadinessTimeout(ctx.name, attempts)
