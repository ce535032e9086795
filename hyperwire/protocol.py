"""HTTP protocol selection and the request/response values sent over connections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar
from urllib.parse import urlsplit

HTTP_10 = "HTTP/1.0"
HTTP_11 = "HTTP/1.1"
HTTP_2 = "HTTP/2.0"

_VERSION_ALIASES = {
    HTTP_10: HTTP_10,
    HTTP_11: HTTP_11,
    HTTP_2: HTTP_2,
    "HTTP/2": HTTP_2,
}

A = TypeVar("A")
IO = TypeVar("IO")


class HttpProtocol(Enum):
    """The flavour of HTTP used on a connection: HTTP/1.1 or HTTP/2."""

    HTTP1 = HTTP_11
    HTTP2 = HTTP_2

    def multiplex(self) -> bool:
        """Whether this protocol allows multiplexing requests."""
        return self is HttpProtocol.HTTP2

    def version(self) -> str:
        """The HTTP version string this protocol speaks."""
        return self.value

    @classmethod
    def from_version(cls, version: str) -> "HttpProtocol":
        """Choose the protocol for an HTTP version; HTTP/1.0 is served by HTTP/1.1."""
        normalized = _VERSION_ALIASES.get(version)
        if normalized in (HTTP_10, HTTP_11):
            return cls.HTTP1
        if normalized == HTTP_2:
            return cls.HTTP2
        raise ValueError("Unsupported HTTP protocol")


@dataclass
class ProtocolRequest(Generic[IO]):
    """A request to start a protocol connection over a transport."""

    transport: IO
    version: HttpProtocol


@dataclass
class ConnectionInfo(Generic[A]):
    """Addresses of the two ends of a connection."""

    local_addr: A | None = None
    remote_addr: A | None = None


@dataclass
class Request:
    """An HTTP request."""

    method: str
    uri: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = b""
    version: str = HTTP_11

    @classmethod
    def get(cls, uri: str) -> "Request":
        """Build a GET request with an empty body."""
        return cls(method="GET", uri=uri)

    @property
    def scheme(self) -> str | None:
        """The URI scheme, or None if the URI has none."""
        return urlsplit(self.uri).scheme or None

    @property
    def host(self) -> str | None:
        """The URI host as written, keeping brackets around IPv6 literals."""
        netloc = urlsplit(self.uri).netloc.rpartition("@")[2]
        if not netloc:
            return None
        if netloc.startswith("["):
            end = netloc.find("]")
            return netloc if end < 0 else netloc[: end + 1]
        return netloc.split(":", 1)[0] or None

    @property
    def port(self) -> int | None:
        """The explicit URI port, or None if there is none."""
        return urlsplit(self.uri).port


@dataclass
class Response:
    """An HTTP response."""

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = b""
    version: str = HTTP_11