"""A high-level asynchronous HTTP client over a request service."""

from __future__ import annotations

import ssl
from collections.abc import Awaitable, Callable

from hyperwire.protocol import Request, Response

Service = Callable[[Request], Awaitable[Response]]


def default_tls_config() -> ssl.SSLContext:
    """A TLS client context with the platform's trusted certificates, offering h2 and http/1.1."""
    context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    context.set_alpn_protocols(["h2", "http/1.1"])
    return context


class Client:
    """An HTTP client that sends requests through a service.

    The service is an async callable taking a Request and returning a Response.
    """

    def __init__(self, service: Service) -> None:
        self._service = service

    async def request(self, request: Request) -> Response:
        """Send a request and return its response."""
        return await self._service(request)

    async def get(self, uri: str) -> Response:
        """Send a GET request with an empty body to the URI."""
        return await self.request(Request.get(uri))

    def into_inner(self) -> Service:
        """The service this client sends requests through."""
        return self._service

    def __repr__(self) -> str:
        return "Client"