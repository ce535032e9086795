import pytest

from hyperwire.tcp_config import (
    InvalidUri,
    TcpConnectionError,
    TcpTransportConfig,
    get_host_and_port,
)


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("http://example.com", ("example.com", 80)),
        ("http://example.com:8080", ("example.com", 8080)),
        ("https://example.com", ("example.com", 443)),
        ("https://example.com:8443", ("example.com", 8443)),
    ],
)
def test_get_host_and_port(uri, expected):
    assert get_host_and_port(uri) == expected


@pytest.mark.parametrize("uri", ["grpc://example.com", "grpc://[::1]"])
def test_get_host_and_port_missing_port(uri):
    with pytest.raises(TcpConnectionError) as info:
        get_host_and_port(uri)
    assert isinstance(info.value.source, InvalidUri)
    assert str(info.value) == "missing port: invalid URI"


def test_get_host_and_port_strips_brackets():
    assert get_host_and_port("http://[::1]:9000") == ("::1", 9000)


def test_get_host_and_port_missing_host():
    with pytest.raises(TcpConnectionError) as info:
        get_host_and_port("/path/")
    assert str(info.value) == "missing host: invalid URI"


def test_error_message_without_source():
    err = TcpConnectionError("Exhausted connection candidates")
    assert str(err) == "Exhausted connection candidates"
    assert err.__cause__ is None


def test_error_message_with_source():
    cause = OSError("no address found")
    err = TcpConnectionError("dns resolution failed", cause)
    assert str(err) == "dns resolution failed: no address found"
    assert err.__cause__ is cause


def test_config_instances_are_independent():
    first = TcpTransportConfig()
    second = TcpTransportConfig(connect_timeout=None)
    assert second.connect_timeout is None
    assert first.connect_timeout == TcpTransportConfig().connect_timeout
    assert second.happy_eyeballs_timeout == first.happy_eyeballs_timeout