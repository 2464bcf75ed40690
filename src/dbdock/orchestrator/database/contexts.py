# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Context dataclass passed through the create pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import DbdockConfig
from ..database_options import DatabaseOptions
from ..docker_client import ContainerEngine
from ..operations import OperationReporter


@dataclass
class CreateContext:
    """Context passed through the container creation pipeline.

    Steps read ``opts`` and talk to the engine; the port selection
    step may rewrite ``opts.port``.  Steps should guard their own
    preconditions (e.g. only probe when the default port is requested).
    """

    opts: DatabaseOptions
    engine: ContainerEngine
    config: DbdockConfig
    progress: OperationReporter | None

    @property
    def name(self) -> str:
        return self.opts.name

    def info(self, msg: str) -> None:
        if self.progress:
            self.progress.info(msg)

    def dim(self, msg: str) -> None:
        if self.progress:
            self.progress.dim(msg)

    def warning(self, msg: str) -> None:
        if self.progress:
            self.progress.warning(msg)
