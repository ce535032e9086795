import ssl

import pytest

from hyperwire.client import Client, default_tls_config
from hyperwire.mock import MockConnectionError, MockSender
from hyperwire.protocol import Request, Response


class _Recorder:
    def __init__(self):
        self.seen = []

    async def __call__(self, request):
        self.seen.append(request)
        return Response(status=204, body=request.uri)


@pytest.mark.asyncio
async def test_get_sends_get_with_empty_body():
    recorder = _Recorder()
    client = Client(recorder)
    response = await client.get("http://example.com")
    assert response.body == "http://example.com"
    assert len(recorder.seen) == 1
    assert recorder.seen[0].method == "GET"
    assert recorder.seen[0].body == b""


@pytest.mark.asyncio
async def test_request_passes_through_service():
    client = Client(MockSender().send_request)
    request = Request(method="PUT", uri="http://example.com/x", body=b"payload")
    response = await client.request(request)
    assert response.body == b"payload"


@pytest.mark.asyncio
async def test_errors_propagate():
    async def failing(request):
        raise MockConnectionError()

    client = Client(failing)
    with pytest.raises(MockConnectionError):
        await client.get("http://example.com")


def test_into_inner_returns_service():
    recorder = _Recorder()
    assert Client(recorder).into_inner() is recorder


def test_repr():
    assert repr(Client(_Recorder())) == "Client"


def test_default_tls_config_verifies_servers():
    context = default_tls_config()
    assert context.verify_mode == ssl.CERT_REQUIRED
    assert context.check_hostname is True