"""Pydantic models for ``docker inspect`` output.

Only the fields dbdock reads are modelled; everything else in the
inspect document is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _DockerModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PortBinding(_DockerModel):
    host_ip: str | None = Field(default=None, alias="HostIp")
    host_port: str | None = Field(default=None, alias="HostPort")


class ContainerConfig(_DockerModel):
    image: str | None = Field(default=None, alias="Image")
    env: list[str] | None = Field(default=None, alias="Env")


class ContainerState(_DockerModel):
    status: str | None = Field(default=None, alias="Status")
    running: bool = Field(default=False, alias="Running")


class NetworkSettings(_DockerModel):
    ports: dict[str, list[PortBinding] | None] | None = Field(default=None, alias="Ports")


class ContainerInspect(_DockerModel):
    """A single element of the JSON array printed by ``docker inspect``."""

    id: str = Field(alias="Id")
    name: str = Field(default="", alias="Name")
    state: ContainerState | None = Field(default=None, alias="State")
    config: ContainerConfig | None = Field(default=None, alias="Config")
    network_settings: NetworkSettings | None = Field(default=None, alias="NetworkSettings")

    def env_dict(self) -> dict[str, str]:
        """Return ``Config.Env`` as a dict.  Entries without ``=`` are skipped."""
        env: dict[str, str] = {}
        for entry in (self.config.env if self.config else None) or []:
            key, sep, value = entry.partition("=")
            if sep:
                env[key] = value
        return env

    def host_port(self, container_port: str) -> str | None:
        """Return the first host port published for *container_port* (e.g. ``5432/tcp``)."""
        if self.network_settings is None or not self.network_settings.ports:
            return None
        for binding in self.network_settings.ports.get(container_port) or []:
            if binding.host_port:
                return binding.host_port
        return None
