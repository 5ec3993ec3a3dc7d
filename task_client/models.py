"""
Client-side data models.

Both records are transient copies of server state: a ``Task`` lives only
for one render cycle and a ``Session`` only mirrors what the session store
holds.  Field names follow Python conventions; ``Task.from_api`` maps the
server's ``_id`` / ``isCompleted`` keys onto them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Session:
    """
    Client-held proof of authentication.

    Attributes:
        token: Opaque bearer token issued by the remote service, or None.
        username: Name of the logged-in user, or None.
    """

    token: str | None = None
    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """True when a token is present; expiry is never checked locally."""
        return bool(self.token)


@dataclass(frozen=True)
class Task:
    """
    A single to-do item owned by the remote service.

    Attributes:
        id: Opaque identifier assigned by the server.
        description: Non-empty task text.
        is_completed: Whether the task has been completed.
    """

    id: str
    description: str
    is_completed: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Task":
        """
        Build a task from the server's JSON shape.

        Args:
            data: Task payload of the form ``{_id, description, isCompleted}``.

        Returns:
            The decoded :class:`Task`.
        """
        return cls(
            id=str(data["_id"]),
            description=str(data.get("description") or ""),
            is_completed=bool(data.get("isCompleted", False)),
        )
