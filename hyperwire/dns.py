"""DNS resolution and ordering of candidate socket addresses."""

from __future__ import annotations

import asyncio
import ipaddress
import socket
from collections import deque
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Union

IpAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
SocketAddr = tuple[IpAddress, int]


class IpVersion(Enum):
    """IP protocol version."""

    V4 = 4
    V6 = 6

    @classmethod
    def from_binding(
        cls,
        ipv4: ipaddress.IPv4Address | str | None,
        ipv6: ipaddress.IPv6Address | str | None,
    ) -> "IpVersion | None":
        """Pick the preferred version from configured local bind addresses.

        IPv6 is preferred when both are present.
        """
        if ipv6 is not None:
            return cls.V6
        if ipv4 is not None:
            return cls.V4
        return None

    def is_v4(self) -> bool:
        """Whether this is IPv4."""
        return self is IpVersion.V4

    def is_v6(self) -> bool:
        """Whether this is IPv6."""
        return self is IpVersion.V6


def _parse_ip(value: IpAddress | str) -> IpAddress:
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return value
    return ipaddress.ip_address(value)


def ip_version(address: IpAddress | str | tuple) -> IpVersion:
    """The IP version of an IP address or a (host, port) socket address."""
    if isinstance(address, tuple):
        address = address[0]
    ip = _parse_ip(address)
    return IpVersion.V4 if ip.version == 4 else IpVersion.V6


def _normalize(address: tuple) -> SocketAddr:
    host, port = address[0], address[1]
    return (_parse_ip(host), int(port))


class SocketAddrs:
    """An ordered collection of (ip, port) socket addresses."""

    def __init__(self, addresses: Iterable[tuple] = ()) -> None:
        self._addrs: deque[SocketAddr] = deque(_normalize(a) for a in addresses)

    def set_port(self, port: int) -> None:
        """Set the port of every address."""
        self._addrs = deque((ip, port) for ip, _ in self._addrs)

    def pop(self) -> SocketAddr | None:
        """Remove and return the first address, or None when empty."""
        return self._addrs.popleft() if self._addrs else None

    def sort_preferred(self, prefer: IpVersion | None) -> None:
        """Move the first address of each IP version to the front.

        The preferred version goes first; without a preference IPv6 leads.
        """
        v4_idx: int | None = None
        v6_idx: int | None = None
        for idx, addr in enumerate(self._addrs):
            version = ip_version(addr)
            if version is IpVersion.V4 and v4_idx is None:
                v4_idx = idx
            elif version is IpVersion.V6 and v6_idx is None:
                v6_idx = idx
            if v4_idx is not None and v6_idx is not None:
                break

        items = list(self._addrs)
        v4 = items[v4_idx] if v4_idx is not None else None
        v6 = items[v6_idx] if v6_idx is not None else None
        removed = {i for i in (v4_idx, v6_idx) if i is not None}
        rest = [addr for i, addr in enumerate(items) if i not in removed]

        if v4 is not None and v6 is not None:
            front = [v4, v6] if prefer is IpVersion.V4 else [v6, v4]
        else:
            front = [addr for addr in (v4, v6) if addr is not None]

        self._addrs = deque(front + rest)

    def __len__(self) -> int:
        return len(self._addrs)

    def __iter__(self) -> Iterator[SocketAddr]:
        return iter(self._addrs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SocketAddrs):
            return NotImplemented
        return list(self._addrs) == list(other._addrs)

    def __repr__(self) -> str:
        return f"SocketAddrs({list(self._addrs)!r})"


class GaiResolver:
    """Resolver that asks the operating system via getaddrinfo."""

    async def resolve(self, host: str) -> SocketAddrs:
        """Resolve a host name to socket addresses with port 0.

        Raises OSError when resolution fails.
        """
        loop = asyncio.get_running_loop()
        infos = await loop.getaddrinfo(host, 0, type=socket.SOCK_STREAM)
        return SocketAddrs((info[4][0], info[4][1]) for info in infos)

    def __repr__(self) -> str:
        return "GaiResolver()"