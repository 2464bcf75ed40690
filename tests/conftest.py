# SPDX-FileCopyrightText: 2026 KDE Community
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Pytest configuration shared by unit and integration tests."""

from __future__ import annotations

import os
from pathlib import Path
import shutil

import pytest

# ---------------------------------------------------------------------------
# Engine configuration
# ---------------------------------------------------------------------------

DOCKER_BINARY = os.environ.get("DBDOCK_TEST_DOCKER", "docker")


def docker_available() -> bool:
    return shutil.which(DOCKER_BINARY) is not None


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers",
        "integration: needs a real docker engine (run with '-m integration')",
    )


@pytest.fixture
def docker_engine():
    """A real DockerEngine; skips the test when no engine is installed."""
    from dbdock.orchestrator.docker_client import DockerEngine

    if not docker_available():
        pytest.skip(f"{DOCKER_BINARY} not found on PATH")
    return DockerEngine(DOCKER_BINARY)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host's dbdock config files and DBDOCK_* variables out of tests."""
    from dbdock.orchestrator import config

    for key in list(os.environ):
        if key.startswith(config.ENV_PREFIX) and key != "DBDOCK_TEST_DOCKER":
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr(config, "SYSTEM_CONFIG_PATH", tmp_path / "etc" / "dbdock.conf")
