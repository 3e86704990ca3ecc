# eventa/session.py
from typing import Optional

import httpx
from loguru import logger

from eventa.config import ALLOWED_ROLE
from eventa.errors import AuthenticationError
from eventa.models.user import SessionUser
from eventa.services import auth
from eventa.storage import TOKEN_KEY, USER_KEY, LocalStorage
from eventa.utils.auth_utils import bearer_header, user_from_token


class Session:
    """
    Authentication state shared by the services and screens of one app run.

    open() when the app starts, close() when it exits; logout() in between
    drops the credentials but keeps the session usable for a new login.
    """

    def __init__(self, client: httpx.AsyncClient, storage: LocalStorage, allowed_role: str = ALLOWED_ROLE):
        self.client = client
        self.storage = storage
        self.allowed_role = allowed_role
        self.user: Optional[SessionUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def token(self) -> Optional[str]:
        return self.user.token if self.user else None

    async def open(self) -> "Session":
        """Restore the user from the token kept in local storage, if still usable."""
        token = await self.storage.get_item(TOKEN_KEY)
        if not token:
            return self

        try:
            self.user = user_from_token(token, allowed_role=self.allowed_role)
        except AuthenticationError as e:
            logger.info(f"Stored token dropped: {e.detail}")
            await self.logout()
            return self

        await self.storage.set_item(USER_KEY, self.user.model_dump(mode="json"))
        return self

    async def login(self, email: str, password: str) -> SessionUser:
        body = await auth.login(self, email, password)
        return await self.start(body.get("token") if isinstance(body, dict) else None)

    async def login_with_google(self, id_token: str) -> SessionUser:
        body = await auth.google_login(self, id_token)
        return await self.start(body.get("token") if isinstance(body, dict) else None)

    async def start(self, token: Optional[str]) -> SessionUser:
        """Adopt a freshly issued token as the current credentials."""
        if not token:
            raise AuthenticationError("No token received from the server")

        try:
            user = user_from_token(token, allowed_role=self.allowed_role)
        except AuthenticationError:
            await self.logout()
            raise

        await self.storage.set_item(TOKEN_KEY, token)
        await self.storage.set_item(USER_KEY, user.model_dump(mode="json"))
        self.user = user
        logger.info(f"Logged in as {user.email}")
        return user

    async def logout(self):
        self.user = None
        await self.storage.remove_item(TOKEN_KEY)
        await self.storage.remove_item(USER_KEY)

    async def close(self):
        await self.client.aclose()

    def auth_headers(self, required: bool = True) -> dict:
        if self.user is None:
            if required:
                raise AuthenticationError("Please log in to continue")
            return {}
        return bearer_header(self.user.token)

    async def __aenter__(self):
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
