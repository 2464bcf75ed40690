"""Process-wide settings and :class:`DatabaseService` used by CLI commands."""

from __future__ import annotations

from ..orchestrator.config import DbdockConfig, load_config
from ..orchestrator.database.service import DatabaseService
from ..orchestrator.docker_client import DockerEngine
from .output import CliReporter, out

_config: DbdockConfig | None = None
_service: DatabaseService | None = None


def get_config() -> DbdockConfig:
    """Get the settings, loading them on first use.

    Raises:
        ConfigError: If a config file or ``DBDOCK_*`` variable is invalid.
    """
    global _config
    if _config is None:
        _config = _service.config if _service is not None else load_config()
    return _config


def get_service() -> DatabaseService:
    """Get or create the service."""
    global _service
    if _service is None:
        config = get_config()
        _service = DatabaseService(
            DockerEngine(config.docker_binary),
            config=config,
            progress=CliReporter(out),
        )
    return _service


def set_service(service: DatabaseService | None) -> None:
    """Replace the service (``None`` resets settings and service to lazy creation)."""
    global _config, _service
    _service = service
    _config = None
