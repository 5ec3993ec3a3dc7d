"""
Transient error banner.

Only one error is ever visible.  Each :meth:`ErrorNotifier.show` replaces
both the text and the hide deadline, so an older message's expiry can never
hide a newer message (cancel-and-restart).  The banner state is kept in the
same origin-scoped storage as the session so it survives the next page
render until it expires.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_HIDE_SECONDS = 4.0

MESSAGE_KEY = "error_message"
EXPIRES_AT_KEY = "error_expires_at"


class ErrorNotifier:
    """
    Single-slot error banner with a fixed auto-hide interval.

    Args:
        storage: Mapping the banner state is kept in.
        hide_after: Seconds a message stays visible.
        clock: Returns the current time in seconds; injectable for tests.
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        hide_after: float = DEFAULT_HIDE_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._storage = storage
        self.hide_after = hide_after
        self._clock = clock

    def show(self, message: str) -> None:
        """Display *message*, restarting the hide timer."""
        logger.info("Showing error: %s", message)
        self._storage[MESSAGE_KEY] = message
        self._storage[EXPIRES_AT_KEY] = self._clock() + self.hide_after

    def hide(self) -> None:
        self._storage.pop(MESSAGE_KEY, None)
        self._storage.pop(EXPIRES_AT_KEY, None)

    def current(self) -> str | None:
        """Return the visible message, or ``None`` once it has expired."""
        message = self._storage.get(MESSAGE_KEY)
        if message is None:
            return None
        if self.remaining() <= 0:
            self.hide()
            return None
        return message

    def remaining(self) -> float:
        """Seconds until the current message hides (0 when nothing shows)."""
        expires_at = self._storage.get(EXPIRES_AT_KEY)
        if expires_at is None:
            return 0.0
        return max(0.0, float(expires_at) - self._clock())
