# hyperwire

Asyncio building blocks for an HTTP client. The package uses only the
standard library.

- `hyperwire.protocol`: the values that move over a connection.
  - `Request` and `Response` hold an HTTP request and an HTTP response.
    `Request.get(uri)` builds a GET request with an empty body.
  - `ConnectionInfo` holds the local and remote addresses of a connection.
  - `HttpProtocol` has two members, `HTTP1` and `HTTP2`.
    `HttpProtocol.from_version("HTTP/1.0")` returns `HTTP1`. Any version
    other than 1.0, 1.1 or 2 raises `ValueError`. Only `HTTP2.multiplex()`
    is true.
- `hyperwire.stream`: client byte streams.
  - `Stream.connect(host, port)` opens a plain TCP stream.
  - `Stream.tls(domain, context)` returns the same stream with TLS added.
  - `Stream.map(func)` wraps the inner stream in something else.
  - The TLS layer (`TlsStream`) does its handshake the first time it is
    read or written, or when `finish_handshake()` is awaited.
  - After the handshake, `tls_info()` returns a `TlsConnectionInfo` with the
    ALPN protocol, the server name and the TLS version.
  - A stream reports `can_share()` only when the ALPN protocol is `h2`.
  - Calling `tls` twice, or calling `map` on a TLS stream, raises
    `RuntimeError`.
- `hyperwire.dns`: name resolution and address ordering.
  - `GaiResolver.resolve(host)` asks the operating system for addresses and
    returns a `SocketAddrs` with every port set to 0.
  - `SocketAddrs.sort_preferred(prefer)` moves the first IPv4 address and the
    first IPv6 address to the front of the list. The preferred version goes
    first. Without a preference, IPv6 goes first.
  - `IpVersion.from_binding(ipv4, ipv6)` returns the version of the local
    bind addresses it is given. When it is given both, it returns IPv6.
- `hyperwire.tcp_config`: settings and URI handling for TCP connections.
  - `TcpTransportConfig` holds the TCP settings. Its timeouts are in seconds.
  - `get_host_and_port(uri)` returns the host and port a URI points to.
  - `TcpConnectionError` is the error for a failed TCP connection.
- `hyperwire.client`: the top layer.
  - `Client` sends a `Request` through a service and returns a `Response`.
    The service is any async callable that takes a `Request` and returns a
    `Response`.
  - `default_tls_config()` returns an `ssl.SSLContext` that trusts the
    platform's certificates and offers `h2` and `http/1.1`.
- `hyperwire.mock`: test doubles that open no sockets. It provides
  `MockStream`, `MockSender`, `MockProtocol` and `MockTransport`.

## Installing

```
pip install hyperwire
```

## A TLS stream

```python
import asyncio

from hyperwire.client import default_tls_config
from hyperwire.stream import Stream


async def main():
    stream = await Stream.connect("example.com", 443)
    stream = stream.tls("example.com", default_tls_config())
    await stream.finish_handshake()
    print(stream.tls_info())
    await stream.write(b"GET / HTTP/1.1\r\nHost: example.com\r\nConnection: close\r\n\r\n")
    print(await stream.read(1024))
    await stream.close()


asyncio.run(main())
```

## Working out where a URI points

```python
from hyperwire.tcp_config import get_host_and_port

get_host_and_port("http://example.com")       # ("example.com", 80)
get_host_and_port("https://example.com:8443") # ("example.com", 8443)
```

A URI with no port gets port 80 for `http` and 443 for `https`. Any other
scheme without a port raises `TcpConnectionError`, and so does a URI with no
host. Brackets around an IPv6 host are removed.

`TcpTransportConfig` has these defaults:

| Setting | Default |
|---|---|
| `connect_timeout` | 10 s |
| `keep_alive_timeout` | 90 s |
| `happy_eyeballs_timeout` | 30 s |
| `happy_eyeballs_concurrency` | 2 |
| `nodelay` | on |
| `reuse_address` | on |

The bind addresses and buffer sizes are unset by default.

## A client over a mock connection

```python
import asyncio

from hyperwire.client import Client
from hyperwire.mock import MockSender
from hyperwire.protocol import Request


async def main():
    client = Client(MockSender().send_request)
    response = await client.request(Request(method="POST", uri="http://example.com", body=b"hi"))
    print(response.body)  # b"hi": the mock echoes the request body


asyncio.run(main())
```

Other mocks:

- `MockTransport.error()` fails every `connect` with `MockConnectionError`.
- `MockTransport.channel(awaitable)` gives its first `connect` the stream
  that the awaitable delivers.
- Closing a `MockStream` also closes every copy of it.

## What this package does not do

The package does not speak HTTP on the wire. It has no HTTP/1.1 or HTTP/2
codec. `Client` needs a service that turns requests into responses, and the
only one the package provides is the mock sender.

The package also has no transport that dials a URI for you. It does not race
connection attempts over the resolved addresses. It does not decide by URI
scheme whether to add TLS. Instead, open a `Stream` yourself with
`Stream.connect` and, if you need it, add TLS with `Stream.tls`.

## Running the tests

```
pip install -e ".[test]"
pytest
```