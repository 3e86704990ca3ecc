"""Reading bearer tokens on the client."""

from datetime import timedelta

import pytest

from eventa.errors import AuthenticationError
from eventa.utils.auth_utils import bearer_header, decode_token, user_from_token
from tests.fake_backend import create_access_token


def test_decode_customer_token():
    token = create_access_token({"sub": "a@b.co", "email": "a@b.co", "role": "ROLE_customer"})
    data = decode_token(token)
    assert data.email == "a@b.co"
    assert data.role == "ROLE_customer"


def test_expired_token_rejected():
    token = create_access_token({"sub": "a@b.co", "role": "ROLE_customer"}, expires_delta=timedelta(minutes=-1))
    with pytest.raises(AuthenticationError, match="expired"):
        decode_token(token)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_rejected(token):
    with pytest.raises(AuthenticationError):
        decode_token(token)


def test_user_from_token_falls_back_to_subject():
    token = create_access_token({"sub": "a@b.co", "role": "ROLE_CUSTOMER"})
    user = user_from_token(token)
    assert user.email == "a@b.co"
    assert user.role == "role_customer"
    assert user.token == token


def test_manager_token_refused():
    token = create_access_token({"sub": "m@b.co", "role": "ROLE_manager"})
    with pytest.raises(AuthenticationError) as exc_info:
        user_from_token(token)
    assert exc_info.value.status_code == 403


def test_bearer_header():
    assert bearer_header("abc") == {"Authorization": "Bearer abc"}
