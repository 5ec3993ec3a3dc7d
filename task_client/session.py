"""
Session store for the task client.

Wraps an origin-scoped key/value mapping that outlives a page reload.  In
the running app this is Flask's signed session cookie; tests pass a plain
``dict``.  The store keeps exactly two string values, ``token`` and
``username``, and never inspects the token: validity is decided solely by
the remote service's response codes.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from .models import Session

TOKEN_KEY = "token"
USERNAME_KEY = "username"


class SessionStore:
    """
    Persisted holder of the current :class:`Session`.

    Args:
        storage: Mapping that survives page reloads for the same origin.
    """

    def __init__(self, storage: MutableMapping[str, Any]):
        self._storage = storage

    def set(self, token: str, username: str) -> None:
        """Persist both values, overwriting any prior session."""
        self._storage[TOKEN_KEY] = token
        self._storage[USERNAME_KEY] = username

    def get(self) -> Session:
        """Return the current session; absent values are ``None``."""
        return Session(
            token=self._storage.get(TOKEN_KEY) or None,
            username=self._storage.get(USERNAME_KEY) or None,
        )

    def clear(self) -> None:
        """Remove both values."""
        self._storage.pop(TOKEN_KEY, None)
        self._storage.pop(USERNAME_KEY, None)

    @property
    def is_authenticated(self) -> bool:
        return self.get().is_authenticated
