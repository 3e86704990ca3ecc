# eventa/utils/auth_utils.py
from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt

from eventa.config import ALLOWED_ROLE
from eventa.errors import AuthenticationError
from eventa.models.user import SessionUser, TokenData


def decode_token(token: str, now: Optional[datetime] = None) -> TokenData:
    """
    Read the claims of a bearer token issued by the backend.

    The signature is not checked here: the signing key lives on the server,
    which verifies every authenticated request anyway. Only the shape and
    the expiry are checked so a stale token is not sent at all.
    """
    if not token:
        raise AuthenticationError("Invalid token", status_code=401)

    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        raise AuthenticationError("Invalid token", status_code=401)

    token_data = TokenData(**{k: claims.get(k) for k in ("sub", "email", "role", "exp")})

    now = now or datetime.now(timezone.utc)
    if token_data.exp is not None and token_data.exp < now.timestamp():
        raise AuthenticationError("Token has expired, please log in again", status_code=401)

    return token_data


def user_from_token(token: str, allowed_role: str = ALLOWED_ROLE, now: Optional[datetime] = None) -> SessionUser:
    """Build the session user, refusing accounts the mobile client is not for."""
    token_data = decode_token(token, now=now)
    role = (token_data.role or "").lower()
    if role != allowed_role.lower():
        raise AuthenticationError("Please use the web site on a computer for this account", status_code=403)

    return SessionUser(token=token, email=token_data.email or token_data.sub, role=role)


def bearer_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
