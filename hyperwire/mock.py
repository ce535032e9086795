"""Mock streams, protocols and transports for exercising connection code in tests."""

from __future__ import annotations

import asyncio
import copy
import itertools
import threading
from collections.abc import Awaitable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from hyperwire.protocol import HTTP_11, ConnectionInfo, HttpProtocol, Request, Response

_ident_counter = itertools.count(1)
_ident_lock = threading.Lock()


class StreamID:
    """A process-wide unique identifier for a mock stream."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        with _ident_lock:
            # Identifiers are 16-bit and wrap around like an atomic u16 counter.
            self._value = next(_ident_counter) & 0xFFFF

    def __str__(self) -> str:
        return f"stream-{self._value}"

    def __repr__(self) -> str:
        return f"StreamID({self._value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StreamID):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)


@dataclass(frozen=True)
class MockAddress:
    """The address of every mock stream."""

    def __str__(self) -> str:
        return "mock://"


class _OpenFlag:
    """Open state shared between a stream and its copies."""

    __slots__ = ("open",)

    def __init__(self) -> None:
        self.open = True


class MockStream:
    """A stream with no I/O, used where a connection is required but never read."""

    def __init__(self, reuse: bool) -> None:
        self._open = _OpenFlag()
        self._reuse = reuse
        self._ident = StreamID()

    def id(self) -> StreamID:
        """The unique identifier of this stream, shared by its copies."""
        return self._ident

    @classmethod
    def single(cls) -> "MockStream":
        """A stream that cannot be shared."""
        return cls(False)

    @classmethod
    def reusable(cls) -> "MockStream":
        """A stream that can be shared."""
        return cls(True)

    def close(self) -> None:
        """Close the stream, and every copy of it."""
        self._open.open = False

    def is_open(self) -> bool:
        """Whether the stream is still open."""
        return self._open.open

    def can_share(self) -> bool:
        """Whether the stream may be shared between connections."""
        return self._reuse

    def info(self) -> ConnectionInfo[MockAddress]:
        """Connection information; both ends are the mock address."""
        return ConnectionInfo(local_addr=MockAddress(), remote_addr=MockAddress())

    def __repr__(self) -> str:
        return (
            f"MockStream(id={self._ident}, reuse={self._reuse}, "
            f"open={self._open.open})"
        )


class MockProtocolError(Exception):
    """Error raised by the mock protocol."""

    def __str__(self) -> str:
        return "mock protocol error"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MockProtocolError)

    def __hash__(self) -> int:
        return hash(MockProtocolError)


class MockSender:
    """A minimal connection that answers each request with its own body."""

    def __init__(self, stream: MockStream | None = None) -> None:
        self._id = StreamID()
        self._stream = stream if stream is not None else MockStream.reusable()

    def id(self) -> StreamID:
        """The unique identifier of this sender."""
        return self._id

    @classmethod
    def single(cls) -> "MockSender":
        """A sender over a single-use stream."""
        return cls(MockStream.single())

    @classmethod
    def reusable(cls) -> "MockSender":
        """A sender over a reusable stream."""
        return cls(MockStream.reusable())

    def close(self) -> None:
        """Close the connection and its stream."""
        self._stream.close()

    async def send_request(self, request: Request) -> Response:
        """Return a response whose body is the request body."""
        return Response(body=request.body)

    async def when_ready(self) -> None:
        """Wait until the connection can take a request; it always can."""

    def version(self) -> str:
        """The HTTP version spoken by this connection."""
        return HTTP_11

    def is_open(self) -> bool:
        """Whether the underlying stream is open."""
        return self._stream.is_open()

    def can_share(self) -> bool:
        """Whether the underlying stream may be shared."""
        return self._stream.can_share()

    def reuse(self) -> "MockSender":
        """A copy of this sender over the same stream."""
        return copy.copy(self)

    @property
    def stream(self) -> MockStream:
        """The stream this sender runs over."""
        return self._stream

    def __repr__(self) -> str:
        return f"MockSender(id={self._id}, stream={self._stream!r})"


@dataclass(frozen=True)
class MockProtocol:
    """A protocol that turns a mock stream into a mock sender."""

    async def connect(self, transport: MockStream, version: HttpProtocol) -> MockSender:
        """Start a connection over the given stream."""
        return MockSender(transport)


class MockConnectionError(Exception):
    """Error raised by the mock transport when a connection fails."""

    def __str__(self) -> str:
        return "connection error"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MockConnectionError)

    def __hash__(self) -> int:
        return hash(MockConnectionError)


class _Mode(Enum):
    SINGLE_USE = auto()
    REUSABLE = auto()
    CONNECTION_ERROR = auto()
    CHANNEL = auto()


class MockTransport:
    """A transport that hands out mock streams, fails, or waits on a channel."""

    def __init__(self, reuse: bool) -> None:
        self._mode = _Mode.REUSABLE if reuse else _Mode.SINGLE_USE
        self._channel: Awaitable[MockStream] | None = None

    @classmethod
    def single(cls) -> "MockTransport":
        """A transport producing single-use streams."""
        return cls(False)

    @classmethod
    def reusable(cls) -> "MockTransport":
        """A transport producing reusable streams."""
        return cls(True)

    @classmethod
    def error(cls) -> "MockTransport":
        """A transport whose every connection attempt fails."""
        transport = cls(False)
        transport._mode = _Mode.CONNECTION_ERROR
        return transport

    @classmethod
    def channel(cls, future: Awaitable[MockStream]) -> "MockTransport":
        """A transport whose first connection yields the stream the awaitable delivers."""
        transport = cls(False)
        transport._mode = _Mode.CHANNEL
        transport._channel = future
        return transport

    def clone(self) -> "MockTransport":
        """A copy of this transport; a channel cannot be copied, so its copy fails."""
        twin = MockTransport(False)
        twin._mode = (
            _Mode.CONNECTION_ERROR if self._mode is _Mode.CHANNEL else self._mode
        )
        return twin

    async def connect(self, request: Any) -> MockStream:
        """Produce a stream for the request, or raise MockConnectionError."""
        if self._mode is _Mode.CONNECTION_ERROR:
            raise MockConnectionError()
        if self._mode is _Mode.CHANNEL:
            channel, self._channel = self._channel, None
            if channel is None:
                raise MockConnectionError()
            try:
                return await channel
            except (asyncio.CancelledError, Exception) as exc:
                raise MockConnectionError() from exc
        return MockStream(self._mode is _Mode.REUSABLE)

    def __repr__(self) -> str:
        return f"MockTransport(mode={self._mode.name.lower()})"