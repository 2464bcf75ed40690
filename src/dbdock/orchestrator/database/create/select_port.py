# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Creation pipeline step: move off the default port when it is taken."""

from __future__ import annotations

from ...network import find_available_port
from ..constants import DEFAULT_PORT
from ..contexts import CreateContext
from . import create_pipeline


@create_pipeline.step(order=-200)
def select_port(ctx: CreateContext) -> None:
    """Probe for a free host port when the default one was requested.

    An explicitly chosen port is used as is.  The probe binds and
    releases each candidate locally, so the engine can still lose a
    race for the port.
    """
    if ctx.opts.port != DEFAULT_PORT:
        return

    port = str(find_available_port(int(DEFAULT_PORT), ctx.config.port_probe_attempts))
    if port != DEFAULT_PORT:
        ctx.warning(f"Port {DEFAULT_PORT} was taken, using port {port} instead")
    ctx.opts.port = port
