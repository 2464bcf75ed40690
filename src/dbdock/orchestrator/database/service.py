# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Database container lifecycle operations.

Every operation re-queries the engine; nothing about a container is
remembered between calls.  Creation is structured as a pipeline of
step functions (see :mod:`.create`); the other operations are a state
check followed by a single engine call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..config import DbdockConfig
from ..database_options import DatabaseOptions
from ..docker_client import ContainerEngine, DockerError
from ..network import AddressResolver
from ..operations import (
    AlreadyRunning,
    AlreadyStopped,
    EngineInvocationFailed,
    NotFound,
    OperationReporter,
)
from .constants import CONTAINER_PORT_KEY, DEFAULT_USER, ENV_DB, ENV_PASSWORD, ENV_USER, POSTGRES_IMAGE
from .contexts import CreateContext
from .create import create_pipeline
from .summary import ConnectionSummary, ContainerSummary, parse_container_line

logger = logging.getLogger(__name__)


class DatabaseService:
    """Create, start, stop, remove, list and inspect database containers."""

    def __init__(
        self,
        engine: ContainerEngine,
        config: DbdockConfig | None = None,
        progress: OperationReporter | None = None,
        addresses: AddressResolver | None = None,
    ):
        """Initialize the database service.

        Args:
            engine: Container engine to drive
            config: Settings; defaults are used when omitted
            progress: Receives progress messages
            addresses: Resolves host/public addresses for connection strings
        """
        self.engine = engine
        self.config = config or DbdockConfig()
        self._progress = progress or OperationReporter()
        self._addresses = addresses or AddressResolver(self.config.public_ip_lookup)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _status(self, name: str) -> tuple[bool, bool]:
        try:
            return self.engine.container_status(name)
        except DockerError as e:
            raise EngineInvocationFailed(
                f"Failed to query container '{name}': {e}", e.command, e.returncode
            ) from e

    def _require_exists(self, name: str) -> bool:
        """Raise :class:`NotFound` unless *name* exists; return its running state."""
        exists, running = self._status(name)
        if not exists:
            raise NotFound(name)
        return running

    def _summarize(self, opts: DatabaseOptions) -> ConnectionSummary:
        host = self._addresses.host_address()
        if host is None:
            self._progress.warning("Could not detect server IP, using localhost")
        return ConnectionSummary.build(opts, host, self._addresses.public_address())

    # -------------------------------------------------------------------------
    # Container Lifecycle Operations
    # -------------------------------------------------------------------------

    def create(self, opts: DatabaseOptions) -> ConnectionSummary:
        """Create a database container and wait until it accepts connections.

        ``opts.port`` is rewritten to the effective port when the default
        port was requested but is taken.  Any failing step aborts the
        rest; a container that was started but never became ready is
        left in place.

        Raises:
            OperationError: Any subclass, depending on the failing step.
        """
        self._progress.info(f"Starting PostgreSQL setup for {opts.name or '(unnamed)'}...")
        ctx = CreateContext(
            opts=opts, engine=self.engine, config=self.config, progress=self._progress,
        )
        create_pipeline.run(ctx)
        self._progress.success(f"Container '{opts.name}' created successfully")
        return self._summarize(opts)

    def start(self, name: str) -> None:
        """Start a stopped container."""
        if self._require_exists(name):
            raise AlreadyRunning(name)

        self._progress.info(f"Starting container {name}...")
        try:
            self.engine.start_container(name)
        except DockerError as e:
            raise EngineInvocationFailed(
                f"Failed to start container: {e}", e.command, e.returncode
            ) from e
        self._progress.success(f"Container '{name}' started successfully")

    def stop(self, name: str, force: bool = False) -> None:
        """Stop a running container.

        With *force* the container is killed without a shutdown grace period.
        """
        if not self._require_exists(name):
            raise AlreadyStopped(name)

        self._progress.info(f"Stopping container {name}...")
        try:
            self.engine.stop_container(name, timeout=0 if force else None)
        except DockerError as e:
            raise EngineInvocationFailed(
                f"Failed to stop container: {e}", e.command, e.returncode
            ) from e
        self._progress.success(f"Container '{name}' stopped successfully")

    def remove(self, name: str, force: bool = False) -> None:
        """Remove a container.

        Without *force* the engine refuses to remove a running container.
        """
        self._require_exists(name)

        self._progress.info(f"Removing container {name}...")
        try:
            self.engine.remove_container(name, force=force)
        except DockerError as e:
            raise EngineInvocationFailed(
                f"Failed to remove container: {e}", e.command, e.returncode
            ) from e
        self._progress.success(f"Container '{name}' removed successfully")

    def list_containers(self) -> Iterator[ContainerSummary]:
        """Yield every container created from the postgres image.

        The version-qualified ancestor filter is tried first, then the
        whole image family.  The engine is queried when iteration
        starts; iterate again by calling :meth:`list_containers` again.
        """
        output = ""
        for ancestor in (f"{POSTGRES_IMAGE}:{self.config.default_version}", POSTGRES_IMAGE):
            try:
                output = self.engine.list_containers(ancestor)
            except DockerError as e:
                raise EngineInvocationFailed(
                    f"Failed to list containers: {e}", e.command, e.returncode
                ) from e
            if output.strip():
                break

        for line in output.strip().splitlines():
            summary = parse_container_line(line)
            if summary is not None:
                yield summary

    def inspect(self, name: str) -> ConnectionSummary:
        """Rebuild connection details from a container's environment and ports."""
        self._require_exists(name)

        try:
            details = self.engine.inspect_container(name)
        except DockerError as e:
            raise EngineInvocationFailed(
                f"Failed to get container details: {e}", e.command, e.returncode
            ) from e

        env = details.env_dict()
        username = env.get(ENV_USER) or DEFAULT_USER
        opts = DatabaseOptions(
            name=name,
            port=details.host_port(CONTAINER_PORT_KEY) or "",
            username=username,
            password=env.get(ENV_PASSWORD, ""),
            database=env.get(ENV_DB) or username,
        )
        logger.debug("Reconstructed options for %s: port=%s user=%s", name, opts.port, username)
        return self._summarize(opts)
