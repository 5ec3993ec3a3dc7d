"""
Shared pytest fixtures for the task client test suite.

Unit tests build the components directly around a plain ``dict`` standing
in for origin storage; integration tests drive the Flask app through its
test client.  Both replace the network with :class:`FakeTransport`, so no
test ever needs a live task API.

Key Concepts Demonstrated:
- Fixture scopes (session for the app, function for everything stateful)
- Monkeypatching ``requests.request`` at the point of use
- Test data factories built on Faker
"""

from __future__ import annotations

import os
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the app
os.environ["FLASK_ENV"] = "testing"

from task_client import create_app
from task_client.api import TaskApiClient
from task_client.controller import TaskPage
from task_client.notifier import ErrorNotifier
from task_client.session import SessionStore
from task_client.view import ViewController
from tests.helpers import FakeClock, FakeTransport

API_BASE_URL = "http://task-api"

fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """Provide the Flask application configured for testing."""
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Provide a Flask test client scoped to a single test function.

    A fresh client means a fresh cookie jar, so session state never leaks
    between tests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Network Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    """Replace ``requests.request`` inside the API client with a recorder."""
    fake_transport = FakeTransport()
    monkeypatch.setattr("task_client.api.requests.request", fake_transport)
    return fake_transport


# -----------------------------------------------------------------------------
# Component Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def storage() -> dict[str, Any]:
    """Stand-in for the origin-scoped key/value store."""
    return {}


@pytest.fixture
def session_store(storage) -> SessionStore:
    return SessionStore(storage)


@pytest.fixture
def logged_in(session_store) -> SessionStore:
    """A session store already holding a token."""
    session_store.set("t1", "alice")
    return session_store


@pytest.fixture
def api_client(session_store) -> TaskApiClient:
    return TaskApiClient(API_BASE_URL, session_store, timeout=2.5)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier(storage, clock) -> ErrorNotifier:
    return ErrorNotifier(storage, hide_after=4, clock=clock)


@pytest.fixture
def page(session_store, api_client, notifier) -> TaskPage:
    """Page handlers sharing the test storage and clock."""
    return TaskPage(session_store, api_client, ViewController(), notifier)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_payload_factory():
    """
    Factory for task payloads in the server's JSON shape.

    Example:
        def test_something(task_payload_factory):
            payload = task_payload_factory(isCompleted=True)
    """

    def _create(**overrides: Any) -> dict[str, Any]:
        payload = {
            "_id": fake.hexify(text="^" * 24),
            "description": fake.sentence(nb_words=4),
            "isCompleted": False,
        }
        payload.update(overrides)
        return payload

    return _create
