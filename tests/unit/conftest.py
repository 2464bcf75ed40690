"""Fixtures for unit tests: an in-memory container engine and a service around it."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from dbdock.orchestrator.config import DbdockConfig
from dbdock.orchestrator.database.service import DatabaseService
from dbdock.orchestrator.docker_client import DockerError
from dbdock.orchestrator.models import ContainerInspect
from dbdock.orchestrator.network import AddressResolver
from dbdock.orchestrator.operations import OperationReporter


@dataclass
class FakeContainer:
    name: str
    running: bool = True
    image: str = "postgres:15"
    port: str | None = "5432"
    env: list[str] = field(default_factory=list)
    id: str = "0123456789abcdef0123"


class FakeEngine:
    """ContainerEngine that keeps containers in a dict and records every call."""

    def __init__(self) -> None:
        self.available = True
        self.containers: dict[str, FakeContainer] = {}
        self.images: set[str] = set()
        self.calls: list[tuple] = []
        # Probe results consumed in order; the last one repeats
        self.probe_results: list[bool] = [True]
        self.fail: dict[str, str] = {}

    def add_container(self, name: str, **kwargs: object) -> FakeContainer:
        container = FakeContainer(name=name, **kwargs)  # type: ignore[arg-type]
        self.containers[name] = container
        return container

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def _record(self, op: str, *args: object) -> None:
        self.calls.append((op, *args))
        if op in self.fail:
            raise DockerError(self.fail[op], ["docker", op], 1)

    def is_available(self) -> bool:
        self._record("is_available")
        return self.available

    def image_exists(self, image: str) -> bool:
        self._record("image_exists", image)
        return image in self.images

    def pull_image(self, image: str) -> None:
        self._record("pull_image", image)
        self.images.add(image)

    def run_container(self, args: Sequence[str]) -> None:
        self._record("run_container", list(args))
        name = args[args.index("--name") + 1]
        port = args[args.index("-p") + 1].split(":")[0]
        env = [args[i + 1] for i, a in enumerate(args) if a == "-e"]
        self.add_container(name, running=True, image=args[-1], port=port, env=env)

    def container_status(self, name: str) -> tuple[bool, bool]:
        self._record("container_status", name)
        container = self.containers.get(name)
        if container is None:
            return False, False
        return True, container.running

    def start_container(self, name: str) -> None:
        self._record("start_container", name)
        self.containers[name].running = True

    def stop_container(self, name: str, timeout: int | None = None) -> None:
        self._record("stop_container", name, timeout)
        self.containers[name].running = False

    def remove_container(self, name: str, force: bool = False) -> None:
        self._record("remove_container", name, force)
        container = self.containers[name]
        if container.running and not force:
            raise DockerError(
                f"cannot remove container \"/{name}\": container is running",
                ["docker", "rm", name],
                1,
            )
        del self.containers[name]

    def list_containers(self, ancestor: str) -> str:
        self._record("list_containers", ancestor)
        rows = []
        for c in self.containers.values():
            if c.image != ancestor and c.image.split(":")[0] != ancestor:
                continue
            status = "Up 5 minutes" if c.running else "Exited (0) 2 hours ago"
            ports = f"0.0.0.0:{c.port}->5432/tcp" if c.port and c.running else ""
            rows.append(f"{c.name}\t{status}\t{ports}\t{c.id}")
        return "\n".join(rows) + ("\n" if rows else "")

    def inspect_container(self, name: str) -> ContainerInspect:
        self._record("inspect_container", name)
        c = self.containers[name]
        ports = {"5432/tcp": [{"HostIp": "0.0.0.0", "HostPort": c.port}]} if c.port else {}
        return ContainerInspect.model_validate(
            {
                "Id": c.id,
                "Name": f"/{name}",
                "State": {"Status": "running" if c.running else "exited", "Running": c.running},
                "Config": {"Image": c.image, "Env": c.env},
                "NetworkSettings": {"Ports": ports},
            }
        )

    def exec_probe(self, name: str, command: Sequence[str]) -> bool:
        self._record("exec_probe", name, tuple(command))
        if len(self.probe_results) > 1:
            return self.probe_results.pop(0)
        return self.probe_results[0]


class StaticAddresses(AddressResolver):
    """Address resolver that never touches the network."""

    def __init__(self, host: str | None = "10.0.0.5", public: str | None = None):
        super().__init__(public_lookup=False)
        self._host = host
        self._public = public

    def host_address(self) -> str | None:
        return self._host

    def public_address(self) -> str | None:
        return self._public


class RecordingReporter(OperationReporter):
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, msg: str) -> None:
        self.messages.append(("info", msg))

    def dim(self, msg: str) -> None:
        self.messages.append(("dim", msg))

    def warning(self, msg: str) -> None:
        self.messages.append(("warning", msg))

    def success(self, msg: str) -> None:
        self.messages.append(("success", msg))


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def config() -> DbdockConfig:
    return DbdockConfig(readiness_attempts=3, readiness_interval=0.0, public_ip_lookup=False)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def service(engine: FakeEngine, config: DbdockConfig, reporter: RecordingReporter) -> DatabaseService:
    return DatabaseService(engine, config=config, progress=reporter, addresses=StaticAddresses())


@pytest.fixture
def make_service(engine: FakeEngine, config: DbdockConfig, reporter: RecordingReporter):
    """Build a service around the fake engine with custom addresses or settings."""

    def _make(
        host: str | None = "10.0.0.5",
        public: str | None = None,
        progress: OperationReporter | None = None,
        **settings: object,
    ) -> DatabaseService:
        cfg = config.model_copy(update=settings)
        return DatabaseService(
            engine,
            config=cfg,
            progress=progress or reporter,
            addresses=StaticAddresses(host, public),
        )

    return _make
