"""Shared fixtures: fake backend, a session wired to it, a recording screen host."""

import asyncio

import pytest
from httpx import ASGITransport

from eventa.flows.screen import ScreenHost
from eventa.main import build_session
from eventa.models.event import EventDetail
from tests import fake_backend
from tests.fake_backend import CUSTOMER_EMAIL, CUSTOMER_PASSWORD, event_payload


class RecordingHost(ScreenHost):
    def __init__(self):
        self.alerts = []
        self.back = 0
        self.routes = []

    def alert(self, title, message):
        self.alerts.append((title, message))

    def go_back(self):
        self.back += 1

    def navigate(self, route, params=None):
        self.routes.append((route, params))


class FakeClock:
    """Monotonic clock that only moves when the fake sleep is awaited."""

    def __init__(self):
        self.now = 1000.0
        self.sleeps = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)


@pytest.fixture
def backend():
    state = fake_backend.reset()
    state.users[CUSTOMER_EMAIL] = {
        "email": CUSTOMER_EMAIL,
        "password": CUSTOMER_PASSWORD,
        "role": "ROLE_customer",
        "fullName": "Tran Trung Duc",
    }
    state.users["manager@example.com"] = {
        "email": "manager@example.com",
        "password": "manager123",
        "role": "ROLE_manager",
    }
    state.events[1] = event_payload()
    return state


@pytest.fixture
async def session(backend, tmp_path):
    async with build_session(
        base_url="http://testserver/api",
        storage_dir=str(tmp_path),
        transport=ASGITransport(app=fake_backend.app),
    ) as s:
        yield s


@pytest.fixture
async def logged_in(session):
    await session.login(CUSTOMER_EMAIL, CUSTOMER_PASSWORD)
    return session


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def event(backend):
    return EventDetail.model_validate(backend.events[1])
