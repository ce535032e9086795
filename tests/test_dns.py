import ipaddress

import pytest

from hyperwire.dns import GaiResolver, IpVersion, SocketAddrs, ip_version

V4_A = ("10.0.0.1", 0)
V4_B = ("10.0.0.2", 0)
V6_A = ("fd00::1", 0)
V6_B = ("fd00::2", 0)


def hosts(addrs):
    return [str(ip) for ip, _ in addrs]


def test_from_binding():
    assert IpVersion.from_binding("1.2.3.4", "::1") is IpVersion.V6
    assert IpVersion.from_binding("1.2.3.4", None) is IpVersion.V4
    assert IpVersion.from_binding(None, "::1") is IpVersion.V6
    assert IpVersion.from_binding(None, None) is None


def test_is_v4_v6():
    assert IpVersion.V4.is_v4() and not IpVersion.V4.is_v6()
    assert IpVersion.V6.is_v6() and not IpVersion.V6.is_v4()


def test_ip_version_of_addresses():
    assert ip_version(ipaddress.ip_address("127.0.0.1")) is IpVersion.V4
    assert ip_version("::1") is IpVersion.V6
    assert ip_version(("10.0.0.1", 80)) is IpVersion.V4


def test_set_port_and_pop():
    addrs = SocketAddrs([V4_A, V6_A])
    addrs.set_port(8080)
    assert [port for _, port in addrs] == [8080, 8080]
    first = addrs.pop()
    assert first == (ipaddress.ip_address(V4_A[0]), 8080)
    assert len(addrs) == 1
    addrs.pop()
    assert addrs.pop() is None
    assert len(addrs) == 0


def test_sort_no_preference_puts_v6_first():
    addrs = SocketAddrs([V4_A, V4_B, V6_A, V6_B])
    addrs.sort_preferred(None)
    assert hosts(addrs) == [V6_A[0], V4_A[0], V4_B[0], V6_B[0]]


def test_sort_prefer_v4():
    addrs = SocketAddrs([V6_A, V6_B, V4_A, V4_B])
    addrs.sort_preferred(IpVersion.V4)
    assert hosts(addrs) == [V4_A[0], V6_A[0], V6_B[0], V4_B[0]]


def test_sort_prefer_v6():
    addrs = SocketAddrs([V4_A, V6_A, V4_B])
    addrs.sort_preferred(IpVersion.V6)
    assert hosts(addrs) == [V6_A[0], V4_A[0], V4_B[0]]


def test_sort_single_family_keeps_order():
    addrs = SocketAddrs([V4_A, V4_B])
    addrs.sort_preferred(IpVersion.V6)
    assert hosts(addrs) == [V4_A[0], V4_B[0]]


def test_sort_empty():
    addrs = SocketAddrs()
    addrs.sort_preferred(IpVersion.V4)
    assert len(addrs) == 0


def test_sort_preserves_members():
    original = [V4_A, V6_A, V4_B, V6_B]
    addrs = SocketAddrs(original)
    addrs.sort_preferred(IpVersion.V4)
    assert sorted(hosts(addrs)) == sorted(h for h, _ in original)


@pytest.mark.asyncio
async def test_gai_resolver_numeric():
    addrs = await GaiResolver().resolve("127.0.0.1")
    assert len(addrs) >= 1
    assert all(ip == ipaddress.ip_address("127.0.0.1") for ip, _ in addrs)
    assert all(port == 0 for _, port in addrs)