"""Container engine interface and its ``docker`` CLI implementation.

:class:`ContainerEngine` is the narrow set of engine operations the
orchestrator needs.  :class:`DockerEngine` implements it by running the
``docker`` binary as a blocking subprocess for every call.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol

from .models import ContainerInspect

logger = logging.getLogger(__name__)

# Format for `docker ps` rows consumed by the list operation
LIST_FORMAT = "{{.Names}}\t{{.Status}}\t{{.Ports}}\t{{.ID}}"

# Environment variables whose values never reach the log
_SECRET_ENV_KEYS = ("POSTGRES_PASSWORD",)


class DockerError(Exception):
    """The engine binary failed or could not be executed."""

    def __init__(
        self,
        message: str,
        args: Sequence[str] = (),
        returncode: int | None = None,
    ):
        super().__init__(message)
        self.command = list(args)
        self.returncode = returncode


class ContainerEngine(Protocol):
    """Engine operations used by the orchestrator."""

    def is_available(self) -> bool: ...

    def image_exists(self, image: str) -> bool: ...

    def pull_image(self, image: str) -> None: ...

    def run_container(self, args: Sequence[str]) -> None: ...

    def container_status(self, name: str) -> tuple[bool, bool]: ...

    def start_container(self, name: str) -> None: ...

    def stop_container(self, name: str, timeout: int | None = None) -> None: ...

    def remove_container(self, name: str, force: bool = False) -> None: ...

    def list_containers(self, ancestor: str) -> str: ...

    def inspect_container(self, name: str) -> ContainerInspect: ...

    def exec_probe(self, name: str, command: Sequence[str]) -> bool: ...


def redact(args: Sequence[str]) -> list[str]:
    """Mask secret ``KEY=value`` environment assignments for logging."""
    redacted: list[str] = []
    for arg in args:
        key, sep, _value = arg.partition("=")
        if sep and key in _SECRET_ENV_KEYS:
            arg = f"{key}=****"
        redacted.append(arg)
    return redacted


def name_filter(name: str) -> str:
    """Build an exact-match ``--filter`` value for a container name.

    Docker treats the filter as a regular expression matched anywhere in
    the name, and names are stored with a leading slash.
    """
    return "name=^/?" + name.replace(".", r"\.") + "$"


class DockerEngine:
    """:class:`ContainerEngine` backed by the ``docker`` command line."""

    def __init__(self, binary: str = "docker"):
        self.binary = binary

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        cmd = [self.binary, *args]
        logger.debug("Running: %s", " ".join(redact(cmd)))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            raise DockerError(f"{self.binary}: command not found", cmd)

        if check and result.returncode != 0:
            message = result.stderr.strip() or f"exited with status {result.returncode}"
            logger.debug("%s %s failed (%d): %s", self.binary, args[0], result.returncode, message)
            raise DockerError(message, cmd, result.returncode)
        return result

    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    def image_exists(self, image: str) -> bool:
        return bool(self._run("images", "-q", image).stdout.strip())

    def pull_image(self, image: str) -> None:
        self._run("pull", image)

    def run_container(self, args: Sequence[str]) -> None:
        self._run("run", *args)

    def container_status(self, name: str) -> tuple[bool, bool]:
        """Return ``(exists, running)`` for the container called *name*.

        ``docker ps`` reports a status such as ``Up 5 minutes`` or
        ``Exited (0) 2 hours ago``; only the ``Up`` prefix means running.
        """
        result = self._run(
            "ps", "-a",
            "--filter", name_filter(name),
            "--format", "{{.Status}}",
        )
        lines = result.stdout.strip().splitlines()
        if not lines:
            return False, False
        return True, lines[0].startswith("Up")

    def start_container(self, name: str) -> None:
        self._run("start", name)

    def stop_container(self, name: str, timeout: int | None = None) -> None:
        args = ["stop"]
        if timeout is not None:
            args += ["-t", str(timeout)]
        args.append(name)
        self._run(*args)

    def remove_container(self, name: str, force: bool = False) -> None:
        args = ["rm"]
        if force:
            args.append("-f")
        args.append(name)
        self._run(*args)

    def list_containers(self, ancestor: str) -> str:
        result = self._run(
            "ps", "-a",
            "--filter", f"ancestor={ancestor}",
            "--format", LIST_FORMAT,
        )
        return result.stdout

    def inspect_container(self, name: str) -> ContainerInspect:
        result = self._run("inspect", "--type", "container", name)
        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise DockerError(f"Unreadable inspect output for '{name}': {e}")
        if not data:
            raise DockerError(f"No inspect data for '{name}'")
        return ContainerInspect.model_validate(data[0])

    def exec_probe(self, name: str, command: Sequence[str]) -> bool:
        return self._run("exec", name, *command, check=False).returncode == 0
