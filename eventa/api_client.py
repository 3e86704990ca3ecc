# eventa/api_client.py
from typing import Any, Optional

import httpx
from loguru import logger

from eventa.config import API_URL, HTTP_TIMEOUT
from eventa.errors import (
    AuthenticationError,
    BusinessRuleError,
    EventaError,
    NetworkError,
    NotFoundError,
    SaleClosedError,
)

SALE_CLOSED_MARKERS = ("has not started", "has ended", "sale is closed")


def create_http_client(
    base_url: str = API_URL,
    timeout: float = HTTP_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    # One base URL for every service
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/") + "/",
        timeout=timeout,
        transport=transport,
        headers={"Accept": "application/json"},
    )


def error_message(response: httpx.Response, default: str) -> str:
    """Pull the human readable message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or default

    if isinstance(body, list):
        return "\n".join(str(item) for item in body) or default
    if isinstance(body, dict):
        return body.get("message") or body.get("detail") or default
    return str(body) or default


def raise_for_response(response: httpx.Response, default: str):
    if not response.is_error:
        return

    status = response.status_code
    detail = error_message(response, default)

    if status in (401, 403):
        raise AuthenticationError(detail, status_code=status)
    if status == 404:
        raise NotFoundError(detail, status_code=status)
    if 400 <= status < 500:
        if any(marker in detail.lower() for marker in SALE_CLOSED_MARKERS):
            raise SaleClosedError(detail, status_code=status)
        raise BusinessRuleError(detail, status_code=status)
    raise EventaError("Internal server error", status_code=status)


async def request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    default_error: str = "Something went wrong",
    **kwargs,
) -> Any:
    """
    Send one request and return the decoded body (JSON, or text otherwise).

    Transport failures become NetworkError and error statuses become the
    matching EventaError subclass. Nothing is retried.
    """
    url = url.lstrip("/")
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        logger.error(f"{method} {url} timed out: {e!r}")
        raise NetworkError("Timeout - the server is responding too slowly") from e
    except httpx.RequestError as e:
        logger.error(f"{method} {url} failed: {e!r}")
        raise NetworkError("Cannot connect to the server. Check the network or the API URL.") from e

    if response.is_error:
        logger.error(f"{method} {url} -> {response.status_code}: {response.text[:500]}")
    raise_for_response(response, default_error)

    if not response.content:
        return None
    if "json" in response.headers.get("content-type", ""):
        return response.json()
    return response.text


def unwrap(body: Any) -> Any:
    """The backend wraps payloads as {"data": ..., "message": ...}."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body
