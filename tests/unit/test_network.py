"""Tests for port probing and address discovery."""

from __future__ import annotations

import socket

import httpx
import pytest

from dbdock.orchestrator import network
from dbdock.orchestrator.network import find_available_port
from dbdock.orchestrator.operations import NoAvailablePort


@pytest.fixture
def occupied_port():
    """A listening socket on an ephemeral port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("", 0))
        sock.listen(1)
        yield sock.getsockname()[1]


def test_skips_occupied_port(occupied_port):
    port = find_available_port(occupied_port, attempts=100)
    assert port != occupied_port
    assert occupied_port < port < occupied_port + 100


def test_exhausted_window_raises(occupied_port):
    with pytest.raises(NoAvailablePort) as exc:
        find_available_port(occupied_port, attempts=1)
    assert exc.value.start == occupied_port


def _transport(responses: dict[str, httpx.Response | Exception]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        result = responses[str(request.url).rstrip("/")]
        if isinstance(result, Exception):
            raise result
        return result

    return httpx.MockTransport(handler)


@pytest.fixture
def mock_http(monkeypatch):
    def install(responses):
        real_client = httpx.Client

        def client(**kwargs):
            return real_client(transport=_transport(responses), **kwargs)

        monkeypatch.setattr(network.httpx, "Client", client)

    return install


def test_public_ip_uses_first_valid_answer(mock_http):
    mock_http({
        "http://ipv4.icanhazip.com": httpx.ConnectError("down"),
        "http://api.ipify.org": httpx.Response(200, text="not-an-ip"),
        "http://ifconfig.me/ip": httpx.Response(200, text="203.0.113.7\n"),
    })
    assert network.get_public_ip() == "203.0.113.7"


def test_public_ip_none_when_all_fail(mock_http):
    mock_http({
        "http://ipv4.icanhazip.com": httpx.Response(500),
        "http://api.ipify.org": httpx.Response(200, text="2001:db8::1"),
        "http://ifconfig.me/ip": httpx.ConnectError("down"),
    })
    assert network.get_public_ip() is None


def test_resolver_skips_public_lookup_when_disabled(monkeypatch):
    monkeypatch.setattr(network, "get_public_ip", lambda: pytest.fail("looked up"))
    assert network.AddressResolver(public_lookup=False).public_address() is None


def test_resolver_host_address_falls_back_to_none(monkeypatch):
    def no_route() -> str:
        raise OSError("Network is unreachable")

    monkeypatch.setattr(network, "get_outbound_ip", no_route)
    assert network.AddressResolver().host_address() is None
