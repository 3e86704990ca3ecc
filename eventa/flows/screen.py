# eventa/flows/screen.py
from typing import Any, Optional

from loguru import logger

from eventa.errors import AuthenticationError, EventaError

LOGIN_ROUTE = "login"
CHECKOUT_ROUTE = "checkout"
MY_TICKETS_ROUTE = "my_tickets"


class ScreenHost:
    """
    What a screen controller needs from the UI embedding it.

    The default implementation only logs, which is enough for headless use;
    a real UI overrides the three methods.
    """

    def alert(self, title: str, message: str):
        logger.info(f"[{title}] {message}")

    def go_back(self):
        logger.info("Navigating back")

    def navigate(self, route: str, params: Optional[Any] = None):
        logger.info(f"Navigating to {route}")


class Screen:
    def __init__(self, host: ScreenHost):
        self.host = host
        self.mounted = False

    def mount(self):
        self.mounted = True

    def unmount(self):
        self.mounted = False

    def report(self, error: EventaError):
        """Show a failure to the user; a rejected login sends them to the login screen."""
        self.host.alert(error.title, error.detail)
        if isinstance(error, AuthenticationError):
            self.host.navigate(LOGIN_ROUTE)
