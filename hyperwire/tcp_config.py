"""Configuration, errors and URI helpers for TCP client connections."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Any

from hyperwire.protocol import Request


@dataclass
class TcpTransportConfig:
    """Options for TCP connections. Timeouts are in seconds."""

    connect_timeout: float | None = 10.0
    keep_alive_timeout: float | None = 90.0
    happy_eyeballs_timeout: float | None = 30.0
    happy_eyeballs_concurrency: int | None = 2
    local_address_ipv4: ipaddress.IPv4Address | None = None
    local_address_ipv6: ipaddress.IPv6Address | None = None
    nodelay: bool = True
    reuse_address: bool = True
    send_buffer_size: int | None = None
    recv_buffer_size: int | None = None


class InvalidUri(Exception):
    """The URI cannot be used to make a connection."""

    def __str__(self) -> str:
        return "invalid URI"


class TcpConnectionError(Exception):
    """A TCP connection could not be established."""

    def __init__(self, message: str, source: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        if isinstance(source, BaseException):
            self.__cause__ = source

    def __str__(self) -> str:
        if self.source is not None:
            return f"{self.message}: {self.source}"
        return self.message


def get_host_and_port(uri: str) -> tuple[str, int]:
    """Extract host and port from a URI, defaulting the port by scheme."""
    request = Request(method="GET", uri=uri)
    host = request.host
    if not host:
        raise TcpConnectionError("missing host", InvalidUri())
    host = host.lstrip("[").rstrip("]")
    try:
        port = request.port
    except ValueError:
        raise TcpConnectionError("invalid port", InvalidUri()) from None
    if port is None:
        scheme = request.scheme
        if scheme == "http":
            port = 80
        elif scheme == "https":
            port = 443
        else:
            raise TcpConnectionError("missing port", InvalidUri())
    return host, port