# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Creation pipeline steps: pull the image and run the container."""

from __future__ import annotations

from ...docker_client import DockerError
from ...operations import EngineInvocationFailed
from ..contexts import CreateContext
from ..run_args import build_run_args
from . import create_pipeline


@create_pipeline.step(order=-100)
def pull_image(ctx: CreateContext) -> None:
    """Pull the image unless it is already present locally."""
    image = ctx.opts.image
    try:
        if ctx.engine.image_exists(image):
            ctx.dim(f"Image {image} already present")
            return
        ctx.info(f"Pulling {image}...")
        ctx.engine.pull_image(image)
    except DockerError as e:
        raise EngineInvocationFailed(f"Failed to pull {image}: {e}", e.command, e.returncode) from e


@create_pipeline.step(order=0)
def create_container(ctx: CreateContext) -> None:
    """Create and start the container in detached mode."""
    ctx.info("Creating container...")
    if ctx.opts.ssl_mode != "disable" and not ctx.opts.ssl_enabled:
        ctx.warning("SSL mode set without both --ssl-cert and --ssl-key; no certificates mounted")

    try:
        ctx.engine.run_container(build_run_args(ctx.opts))
    except DockerError as e:
        raise EngineInvocationFailed(
            f"Failed to create container: {e}", e.command, e.returncode
        ) from e
