"""
Page event handlers.

:class:`TaskPage` wires the session store, API client, view controller and
error notifier together and exposes one handler per UI event.  Handlers are
registered by event name with :func:`handles` and invoked through
:meth:`TaskPage.dispatch`, so the page host only needs to know event names
and their form inputs.

The page object is the single owner of the session lifecycle: it creates
the session on login and clears it on logout or on any authentication
rejection reported by the API client.

Error handling follows three rules:

1. A missing session aborts the event silently.
2. Any other API failure is shown through the error notifier.
3. A 401/403 additionally clears the session and switches to the login view
   before the message is shown.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .api import TaskApiClient
from .errors import AuthenticationRejectedError, MissingSessionError, TaskClientError
from .notifier import ErrorNotifier
from .session import SessionStore
from .view import ViewController, ViewState

logger = logging.getLogger(__name__)

REGISTRATION_NOTICE = "Registration successful! Please log in."

EVENT_HANDLERS: dict[str, str] = {}


def handles(event: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Register the decorated method as the handler for *event*."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        EVENT_HANDLERS[event] = func.__name__
        return func

    return decorator


class UnknownEventError(LookupError):
    """Raised when dispatching an event nobody registered."""


class TaskPage:
    """
    Handlers for every event of the task page.

    Args:
        session_store: Persisted session, owned by this object.
        api: Client for the remote service.
        view: View controller whose state is returned by each handler.
        notifier: Error banner.
        refresh_after_change: Re-fetch and re-render after a successful
            login or task change.  The web host turns this off because it
            reloads the page after every event, which performs the fetch.
    """

    def __init__(
        self,
        session_store: SessionStore,
        api: TaskApiClient,
        view: ViewController,
        notifier: ErrorNotifier,
        *,
        refresh_after_change: bool = True,
    ):
        self.session_store = session_store
        self.api = api
        self.view = view
        self.notifier = notifier
        self.refresh_after_change = refresh_after_change

    def dispatch(self, event: str, **inputs: Any) -> ViewState:
        """
        Run the handler registered for *event*.

        Raises:
            UnknownEventError: If no handler is registered under *event*.
        """
        handler_name = EVENT_HANDLERS.get(event)
        if handler_name is None:
            raise UnknownEventError(event)
        logger.debug("Dispatching page event %s", event)
        return getattr(self, handler_name)(**inputs)

    # -----------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------

    def _sync_auth_view(self, *, fetch: bool = True) -> ViewState:
        """Show the view matching the stored session, fetching tasks if logged in."""
        session = self.session_store.get()
        self.view.set_authenticated_view(session.is_authenticated, session.username)
        if session.is_authenticated and fetch:
            self._fetch_and_render()
        return self.view.state

    def _fetch_and_render(self) -> None:
        try:
            tasks = self.api.list_tasks()
        except TaskClientError as exc:
            self._handle_error(exc)
            return
        self.view.render_task_list(tasks)

    def _after_change(self) -> ViewState:
        return self._sync_auth_view(fetch=self.refresh_after_change)

    def _force_logout(self) -> None:
        self.session_store.clear()
        self.view.set_authenticated_view(False)

    def _handle_error(self, exc: TaskClientError) -> None:
        if isinstance(exc, MissingSessionError):
            logger.debug("No session; event aborted")
            return
        if isinstance(exc, AuthenticationRejectedError):
            logger.warning("Session rejected by server (%s); logging out", exc.status_code)
            self._force_logout()
        self.notifier.show(exc.message)

    # -----------------------------------------------------------------
    # Event handlers
    # -----------------------------------------------------------------

    @handles("load")
    def load(self) -> ViewState:
        """Initial page render."""
        return self._sync_auth_view()

    @handles("login")
    def login(self, username: str, password: str) -> ViewState:
        """
        Log in and switch to the task view.

        The session is stored as ``(token, user.username)`` from the
        response, then the tasks are fetched once.
        """
        try:
            session = self.api.login(username, password)
        except TaskClientError as exc:
            self._handle_error(exc)
            return self._sync_auth_view(fetch=False)

        self.session_store.set(session.token, session.username)
        logger.info("User %s logged in", session.username)
        return self._after_change()

    @handles("register")
    def register(self, username: str, password: str) -> ViewState:
        try:
            self.api.register(username, password)
        except TaskClientError as exc:
            self._handle_error(exc)
        else:
            self.view.show_notice(REGISTRATION_NOTICE)
        return self._sync_auth_view(fetch=False)

    @handles("logout")
    def logout(self) -> ViewState:
        """Clear the session unconditionally and show the login view."""
        self._force_logout()
        return self.view.state

    @handles("create_task")
    def create_task(self, description: str) -> ViewState:
        """
        Create a task from the input text.

        Text that is empty after trimming aborts without a request.
        """
        description = (description or "").strip()
        if not description:
            return self._sync_auth_view(fetch=False)
        try:
            self.api.create_task(description)
        except TaskClientError as exc:
            self._handle_error(exc)
            return self._sync_auth_view(fetch=False)
        return self._after_change()

    @handles("toggle_task")
    def toggle_task(self, task_id: str, displayed_completed: bool | None = None) -> ViewState:
        """
        Flip a task's completion flag.

        The new value is the negation of the state shown on the page when
        the toggle was clicked.  When the caller does not pass it, the
        currently rendered row is consulted; a task with no rendered row is
        ignored.
        """
        if displayed_completed is None:
            displayed_completed = self.view.displayed_completion(task_id)
        if displayed_completed is None:
            logger.debug("Toggle for task %s without a rendered row ignored", task_id)
            return self._sync_auth_view(fetch=False)
        try:
            self.api.set_task_completion(task_id, not displayed_completed)
        except TaskClientError as exc:
            self._handle_error(exc)
            return self._sync_auth_view(fetch=False)
        return self._after_change()

    @handles("delete_task")
    def delete_task(self, task_id: str) -> ViewState:
        """Delete a task by id; the server alone decides whether it existed."""
        try:
            self.api.delete_task(task_id)
        except TaskClientError as exc:
            self._handle_error(exc)
            return self._sync_auth_view(fetch=False)
        return self._after_change()


