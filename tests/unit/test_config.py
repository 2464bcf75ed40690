"""Tests for settings loading."""

from __future__ import annotations

import pytest

from dbdock.orchestrator import config as config_module
from dbdock.orchestrator.config import (
    ConfigError,
    DbdockConfig,
    IniConfigSettingsSource,
    load_config,
    user_config_path,
)


def _write(path, body: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    return path


@pytest.fixture
def user_conf():
    return user_config_path()


@pytest.fixture
def system_conf():
    return config_module.SYSTEM_CONFIG_PATH


def test_defaults_without_files():
    config = load_config()
    assert config == DbdockConfig()
    assert config.docker_binary == "docker"
    assert config.readiness_attempts == 10
    assert config.log_level == "WARNING"


def test_file_values_are_typed(user_conf):
    _write(user_conf, """
[dbdock]
docker_binary = podman
readiness_attempts = 20
readiness_interval = 1.5
public_ip_lookup = no
""")
    config = load_config()
    assert config.docker_binary == "podman"
    assert config.readiness_attempts == 20
    assert config.readiness_interval == 1.5
    assert config.public_ip_lookup is False


def test_user_file_wins_over_system_file(system_conf, user_conf):
    _write(system_conf, "[dbdock]\ndefault_version = 14\nport_probe_attempts = 50\n")
    _write(user_conf, "[dbdock]\ndefault_version = 16\n")
    config = load_config()
    assert config.default_version == "16"
    assert config.port_probe_attempts == 50


def test_environment_wins_over_files(user_conf, monkeypatch):
    _write(user_conf, "[dbdock]\ndefault_version = 14\n")
    monkeypatch.setenv("DBDOCK_DEFAULT_VERSION", "17")
    monkeypatch.setenv("DBDOCK_PUBLIC_IP_LOOKUP", "off")
    config = load_config()
    assert config.default_version == "17"
    assert config.public_ip_lookup is False


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("DBDOCK_LOG_LEVEL", "debug")
    assert load_config().log_level == "DEBUG"


def test_explicit_source_paths(tmp_path):
    first = _write(tmp_path / "a.conf", "[dbdock]\ndocker_binary = podman\ndefault_version = 14\n")
    second = _write(tmp_path / "b.conf", "[dbdock]\ndefault_version = 16\n")
    source = IniConfigSettingsSource(DbdockConfig, [first, tmp_path / "missing.conf", second])
    assert source() == {"docker_binary": "podman", "default_version": "16"}


def test_unknown_key(user_conf):
    _write(user_conf, "[dbdock]\nimage = mysql\n")
    with pytest.raises(ConfigError, match="Unknown setting 'image'"):
        load_config()


@pytest.mark.parametrize(
    "name, value",
    [
        ("DBDOCK_READINESS_ATTEMPTS", "many"),
        ("DBDOCK_READINESS_INTERVAL", "soon"),
        ("DBDOCK_PUBLIC_IP_LOOKUP", "maybe"),
        ("DBDOCK_READINESS_ATTEMPTS", "0"),
        ("DBDOCK_PORT_PROBE_ATTEMPTS", "-1"),
        ("DBDOCK_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match="Invalid setting"):
        load_config()


def test_file_without_section_header(user_conf):
    _write(user_conf, "docker_binary = podman\n")
    with pytest.raises(ConfigError, match="Cannot read config file") as exc:
        load_config()
    assert str(user_conf) in str(exc.value)


def test_percent_in_value_is_literal(user_conf):
    _write(user_conf, "[dbdock]\ndocker_binary = /opt/100%docker\n")
    assert load_config().docker_binary == "/opt/100%docker"


def test_settings_are_immutable():
    config = DbdockConfig()
    with pytest.raises(ValueError):
        config.readiness_attempts = 5  # type: ignore[misc]


def test_user_config_path_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert user_config_path() == tmp_path / "dbdock" / "dbdock.conf"
