"""
Test doubles shared by the unit and integration suites.

``FakeTransport`` replaces :func:`requests.request` inside
``task_client.api``: it records every call and answers from a table of
canned responses keyed by ``(method, path)``.  Unregistered routes answer
404 so an unexpected request shows up as a failure rather than a hang.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit


class FakeResponse:
    """
    Minimal stand-in for :class:`requests.Response`.

    Provides ``status_code`` and ``json()``, the only attributes the API
    client reads.  A ``payload`` of ``None`` models a non-JSON body.
    """

    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        """Return the configured payload or fail like a non-JSON body."""
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@dataclass
class RecordedCall:
    """One request captured by :class:`FakeTransport`."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None
    timeout: float | None = None


class FakeTransport:
    """Callable replacement for ``requests.request`` with canned replies."""

    def __init__(self):
        self.calls: list[RecordedCall] = []
        self._routes: dict[tuple[str, str], FakeResponse | Exception] = {}

    def respond(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        payload: Any = None,
    ) -> None:
        self._routes[(method, path)] = FakeResponse(status_code, payload)

    def fail(self, method: str, path: str, error: Exception) -> None:
        """Make a route raise *error* instead of answering."""
        self._routes[(method, path)] = error

    def __call__(self, *, method: str, url: str, headers=None, timeout=None, **kwargs):
        path = urlsplit(url).path
        self.calls.append(
            RecordedCall(
                method=method,
                path=path,
                headers=dict(headers or {}),
                json=kwargs.get("json"),
                timeout=timeout,
            )
        )
        route = self._routes.get((method, path))
        if route is None:
            return FakeResponse(404, {"error": "Not found"})
        if isinstance(route, Exception):
            raise route
        return route

    def calls_to(self, method: str, path: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.method == method and call.path == path]


class FakeClock:
    """Manually advanced clock for the error notifier."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
