"""Host-side helpers: port probing, address discovery, passwords."""

from __future__ import annotations

import ipaddress
import logging
import secrets
import socket
import string

import httpx

from .operations import NoAvailablePort

logger = logging.getLogger(__name__)

# Tried in order; each returns the caller's address as plain text
PUBLIC_IP_SERVICES = (
    "http://ipv4.icanhazip.com",
    "http://api.ipify.org",
    "http://ifconfig.me/ip",
)

_PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


def find_available_port(start: int, attempts: int = 100) -> int:
    """Return the first port in ``start .. start+attempts-1`` that can be bound.

    Each candidate is bound on all interfaces and released straight
    away.  Nothing stops another process from taking the port before
    the container publishes it.

    Raises:
        NoAvailablePort: If every port in the window is taken.
    """
    for port in range(start, start + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind(("", port))
            except OSError as e:
                logger.debug("Port %d unavailable: %s", port, e)
                continue
        return port
    raise NoAvailablePort(start, attempts)


def get_outbound_ip() -> str:
    """Return the IPv4 address of the interface used for outbound traffic.

    Connecting a UDP socket sends no packets; it only selects a route.

    Raises:
        OSError: If the host has no IPv4 route.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect(("8.8.8.8", 80))
        return str(sock.getsockname()[0])


def get_public_ip(timeout: float = 5.0) -> str | None:
    """Ask public lookup services for this host's IPv4 address.

    Returns ``None`` when no service answers with a valid IPv4 address.
    """
    with httpx.Client(timeout=timeout) as client:
        for url in PUBLIC_IP_SERVICES:
            try:
                response = client.get(url)
                response.raise_for_status()
                address = ipaddress.IPv4Address(response.text.strip())
            except (httpx.HTTPError, ValueError) as e:
                logger.debug("Public IP lookup via %s failed: %s", url, e)
                continue
            return str(address)
    return None


class AddressResolver:
    """Resolves the addresses shown in connection strings."""

    def __init__(self, public_lookup: bool = True):
        self.public_lookup = public_lookup

    def host_address(self) -> str | None:
        """Outbound IPv4 address, or ``None`` if it cannot be determined."""
        try:
            return get_outbound_ip()
        except OSError as e:
            logger.debug("Outbound IP detection failed: %s", e)
            return None

    def public_address(self) -> str | None:
        if not self.public_lookup:
            return None
        return get_public_ip()


def generate_password(length: int = 20) -> str:
    """Generate a random password.

    The result contains at least one lowercase letter, one uppercase
    letter, one digit and one symbol.
    """
    if length < 4:
        raise ValueError("password length must be at least 4")
    pools = (string.ascii_lowercase, string.ascii_uppercase, string.digits, _PASSWORD_SYMBOLS)
    alphabet = "".join(pools)
    chars = [secrets.choice(pool) for pool in pools]
    chars += [secrets.choice(alphabet) for _ in range(length - len(pools))]
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
