# eventa/main.py
from typing import Optional

import httpx

import eventa.logger_config  # noqa: F401
from eventa.api_client import create_http_client
from eventa.config import API_URL, HTTP_TIMEOUT, STORAGE_DIR
from eventa.session import Session
from eventa.storage import LocalStorage


def build_session(
    base_url: str = API_URL,
    storage_dir: str = STORAGE_DIR,
    timeout: float = HTTP_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Session:
    """
    Wire the pieces an app run shares. Use it as

        async with build_session() as session:
            ...

    so the stored login is restored on entry and the HTTP client closed on exit.
    """
    client = create_http_client(base_url=base_url, timeout=timeout, transport=transport)
    return Session(client, LocalStorage(storage_dir))
