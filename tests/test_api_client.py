"""Translation of HTTP failures into client errors."""

import httpx
import pytest

from eventa.api_client import create_http_client, request, unwrap
from eventa.errors import (
    AuthenticationError,
    BusinessRuleError,
    EventaError,
    NetworkError,
    NotFoundError,
    SaleClosedError,
)


def _client(handler):
    return create_http_client(base_url="http://backend/api", transport=httpx.MockTransport(handler))


async def test_json_body_is_decoded():
    async with _client(lambda req: httpx.Response(200, json={"data": {"ok": True}})) as client:
        body = await request(client, "GET", "/events/1")
    assert unwrap(body) == {"ok": True}


async def test_relative_paths_keep_the_api_prefix():
    seen = []

    def handler(req):
        seen.append(str(req.url))
        return httpx.Response(200, text="fine")

    async with _client(handler) as client:
        assert await request(client, "GET", "/events/recommend") == "fine"
    assert seen == ["http://backend/api/events/recommend"]


@pytest.mark.parametrize("status,error", [
    (401, AuthenticationError),
    (403, AuthenticationError),
    (404, NotFoundError),
    (400, BusinessRuleError),
    (409, BusinessRuleError),
])
async def test_status_mapping(status, error):
    async with _client(lambda req: httpx.Response(status, json={"message": "nope"})) as client:
        with pytest.raises(error) as exc_info:
            await request(client, "POST", "orders")
    assert exc_info.value.detail == "nope"
    assert exc_info.value.status_code == status


async def test_sale_window_message_is_a_sale_closed_error():
    body = {"message": "Ticket sale for Standard has not started"}
    async with _client(lambda req: httpx.Response(400, json=body)) as client:
        with pytest.raises(SaleClosedError):
            await request(client, "POST", "orders")


async def test_server_error_hides_details():
    async with _client(lambda req: httpx.Response(500, text="Traceback ...")) as client:
        with pytest.raises(EventaError) as exc_info:
            await request(client, "GET", "events/1")
    assert exc_info.value.detail == "Internal server error"


async def test_list_of_messages_is_joined():
    async with _client(lambda req: httpx.Response(400, json=["a", "b"])) as client:
        with pytest.raises(BusinessRuleError, match="a\nb"):
            await request(client, "POST", "auth/register")


async def test_connection_failure_is_a_network_error():
    def handler(req):
        raise httpx.ConnectError("refused", request=req)

    async with _client(handler) as client:
        with pytest.raises(NetworkError):
            await request(client, "GET", "events/1")


async def test_timeout_is_a_network_error():
    def handler(req):
        raise httpx.ReadTimeout("slow", request=req)

    async with _client(handler) as client:
        with pytest.raises(NetworkError, match="Timeout"):
            await request(client, "GET", "events/1")
