"""Session lifecycle: restore, login, logout."""

from datetime import timedelta

import pytest
from httpx import ASGITransport

from eventa.errors import AuthenticationError, InputValidationError, NetworkError
from eventa.main import build_session
from eventa.storage import TOKEN_KEY, USER_KEY
from tests import fake_backend
from tests.fake_backend import CUSTOMER_EMAIL, CUSTOMER_PASSWORD, create_access_token


def _session(tmp_path):
    return build_session(
        base_url="http://testserver/api",
        storage_dir=str(tmp_path),
        transport=ASGITransport(app=fake_backend.app),
    )


async def test_login_stores_token(session):
    user = await session.login(CUSTOMER_EMAIL, CUSTOMER_PASSWORD)

    assert session.is_authenticated
    assert user.email == CUSTOMER_EMAIL
    assert await session.storage.get_item(TOKEN_KEY) == user.token
    assert (await session.storage.get_item(USER_KEY))["email"] == CUSTOMER_EMAIL


async def test_wrong_password(session):
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        await session.login(CUSTOMER_EMAIL, "nope")
    assert not session.is_authenticated


async def test_invalid_email_rejected_locally(session):
    with pytest.raises(InputValidationError):
        await session.login("not-an-email", CUSTOMER_PASSWORD)


async def test_manager_cannot_use_the_app(session):
    with pytest.raises(AuthenticationError):
        await session.login("manager@example.com", "manager123")
    assert not session.is_authenticated
    assert await session.storage.get_item(TOKEN_KEY) is None


async def test_google_login(session):
    user = await session.login_with_google(CUSTOMER_EMAIL)
    assert user.email == CUSTOMER_EMAIL


async def test_login_is_restored_on_next_start(backend, tmp_path):
    async with _session(tmp_path) as first:
        await first.login(CUSTOMER_EMAIL, CUSTOMER_PASSWORD)

    async with _session(tmp_path) as second:
        assert second.is_authenticated
        assert second.user.email == CUSTOMER_EMAIL


async def test_expired_stored_token_is_dropped(backend, tmp_path):
    s = _session(tmp_path)
    expired = create_access_token({"sub": CUSTOMER_EMAIL, "role": "ROLE_customer"}, expires_delta=timedelta(minutes=-5))
    await s.storage.set_item(TOKEN_KEY, expired)

    async with s:
        assert not s.is_authenticated
        assert await s.storage.get_item(TOKEN_KEY) is None


async def test_logout_clears_credentials(logged_in):
    await logged_in.logout()

    assert not logged_in.is_authenticated
    assert await logged_in.storage.get_item(TOKEN_KEY) is None
    with pytest.raises(AuthenticationError):
        logged_in.auth_headers()
    assert logged_in.auth_headers(required=False) == {}


async def test_start_without_token(session):
    with pytest.raises(AuthenticationError):
        await session.start(None)


async def test_unreachable_backend_is_a_network_error(tmp_path):
    async with build_session(base_url="http://127.0.0.1:9/api", storage_dir=str(tmp_path), timeout=1.0) as s:
        with pytest.raises(NetworkError):
            await s.login(CUSTOMER_EMAIL, CUSTOMER_PASSWORD)
