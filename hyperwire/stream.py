"""Client streams over plain transports, with an optional delayed TLS layer."""

from __future__ import annotations

import asyncio
import inspect
import ssl
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Callable

from hyperwire.protocol import ConnectionInfo

_CHUNK = 65536


async def _settle(result: Any) -> Any:
    """Await a result if a stream method returned an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result


@dataclass(frozen=True)
class TlsConnectionInfo:
    """What was agreed on during a TLS handshake."""

    alpn: str | None = None
    server_name: str | None = None
    version: str | None = None

    def can_share(self) -> bool:
        """Whether the negotiated protocol (HTTP/2) lets connections be shared."""
        return self.alpn == "h2"


class _TcpIO:
    """A plain TCP stream backed by asyncio reader and writer objects."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self._reader = reader
        self._writer = writer

    def info(self) -> ConnectionInfo[tuple]:
        local = self._writer.get_extra_info("sockname")
        remote = self._writer.get_extra_info("peername")
        return ConnectionInfo(
            local_addr=tuple(local[:2]) if local else None,
            remote_addr=tuple(remote[:2]) if remote else None,
        )

    async def read(self, n: int = _CHUNK) -> bytes:
        return await self._reader.read(n)

    def write(self, data: bytes) -> None:
        self._writer.write(data)

    async def drain(self) -> None:
        await self._writer.drain()

    async def close(self) -> None:
        self._writer.close()
        with suppress(ConnectionError):
            await self._writer.wait_closed()


class TlsStream:
    """A TLS client stream over another stream.

    The handshake is delayed until the first read or write, or until
    ``handshake`` is awaited.
    """

    def __init__(self, inner: Any, domain: str, context: ssl.SSLContext) -> None:
        if not domain:
            raise ValueError("should be valid dns name")
        self._inner = inner
        self._domain = domain
        self._incoming = ssl.MemoryBIO()
        self._outgoing = ssl.MemoryBIO()
        self._ssl = context.wrap_bio(
            self._incoming, self._outgoing, server_side=False, server_hostname=domain
        )
        self._info = inner.info()
        self._tls: TlsConnectionInfo | None = None

    async def _flush(self) -> None:
        data = self._outgoing.read()
        if data:
            await _settle(self._inner.write(data))
            await self._inner.drain()

    async def _fill(self) -> None:
        data = await self._inner.read(_CHUNK)
        if data:
            self._incoming.write(data)
        else:
            self._incoming.write_eof()

    async def handshake(self) -> None:
        """Complete the TLS handshake if it has not been completed yet."""
        if self._tls is not None:
            return
        while True:
            try:
                self._ssl.do_handshake()
                break
            except ssl.SSLWantReadError:
                await self._flush()
                await self._fill()
        await self._flush()
        self._tls = TlsConnectionInfo(
            alpn=self._ssl.selected_alpn_protocol(),
            server_name=self._domain,
            version=self._ssl.version(),
        )

    def info(self) -> ConnectionInfo:
        """Connection information of the underlying stream."""
        return self._info

    def tls_info(self) -> TlsConnectionInfo | None:
        """TLS information, available once the handshake is complete."""
        return self._tls

    def can_share(self) -> bool:
        """Whether the negotiated protocol allows sharing this stream."""
        return self._tls.can_share() if self._tls is not None else False

    async def read(self, n: int = _CHUNK) -> bytes:
        """Read up to n decrypted bytes; b"" at the end of the stream."""
        await self.handshake()
        while True:
            try:
                return self._ssl.read(n)
            except ssl.SSLWantReadError:
                await self._flush()
                await self._fill()
            except ssl.SSLZeroReturnError:
                return b""

    async def write(self, data: bytes) -> None:
        """Encrypt and send data."""
        await self.handshake()
        self._ssl.write(data)
        await self._flush()

    async def drain(self) -> None:
        """Flush the underlying stream; nothing to do before the handshake."""
        if self._tls is None:
            return
        await self._inner.drain()

    async def close(self) -> None:
        """Send close_notify if the session is up, then close the underlying stream."""
        if self._tls is not None:
            with suppress(ssl.SSLError):
                self._ssl.unwrap()
            with suppress(OSError):
                await self._flush()
        await _settle(self._inner.close())

    def __repr__(self) -> str:
        state = "Streaming" if self._tls is not None else "Handshake"
        return f"TlsStream(state={state}, domain={self._domain!r})"


class Stream:
    """A client stream over any transport, optionally carrying TLS."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self._is_tls = False

    @classmethod
    def _from_tls(cls, tls_stream: TlsStream) -> "Stream":
        stream = cls(tls_stream)
        stream._is_tls = True
        return stream

    @classmethod
    async def connect(cls, host: str, port: int) -> "Stream":
        """Connect to a server over TCP."""
        reader, writer = await asyncio.open_connection(host, port)
        return cls(_TcpIO(reader, writer))

    def map(self, func: Callable[[Any], Any]) -> "Stream":
        """A new stream over func applied to the inner stream.

        Raises RuntimeError on a TLS stream.
        """
        if self._is_tls:
            raise RuntimeError("Stream.map called on a TLS stream")
        return Stream(func(self._inner))

    def tls(self, domain: str, context: ssl.SSLContext) -> "Stream":
        """A new stream with TLS added for the given server name.

        Raises RuntimeError if TLS was already added.
        """
        if self._is_tls:
            raise RuntimeError("Stream.tls called twice")
        return Stream._from_tls(TlsStream(self._inner, domain, context))

    async def finish_handshake(self) -> None:
        """Complete the TLS handshake; a plain stream has none."""
        if self._is_tls:
            await self._inner.handshake()

    def info(self) -> ConnectionInfo:
        """Connection information of the stream."""
        return self._inner.info()

    def tls_info(self) -> TlsConnectionInfo | None:
        """TLS information, or None for plain streams and unfinished handshakes."""
        return self._inner.tls_info() if self._is_tls else None

    def can_share(self) -> bool:
        """Whether the stream may be shared; only TLS streams negotiating h2 can."""
        return self._inner.can_share() if self._is_tls else False

    async def read(self, n: int = _CHUNK) -> bytes:
        """Read up to n bytes."""
        return await self._inner.read(n)

    async def write(self, data: bytes) -> None:
        """Write data to the stream."""
        await _settle(self._inner.write(data))

    async def drain(self) -> None:
        """Flush written data."""
        await self._inner.drain()

    async def close(self) -> None:
        """Close the stream."""
        await _settle(self._inner.close())

    def __repr__(self) -> str:
        return f"Stream(inner={self._inner!r})"