"""
HTTP client for the remote task API.

Every call goes through :meth:`TaskApiClient._request`, which builds the
URL, attaches the bearer header for task endpoints and applies the
configured timeout.  Non-success statuses and transport failures are
translated into the typed errors from :mod:`task_client.errors`; nothing is
retried.

Endpoints:
    GET    /api/tasks            - list the user's tasks
    POST   /api/tasks            - create a task
    PUT    /api/tasks/<id>       - set a task's completion flag
    DELETE /api/tasks/<id>       - delete a task
    POST   /api/auth/register    - create an account
    POST   /api/auth/login       - exchange credentials for a token
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from .errors import ApiError, AuthenticationRejectedError, MissingSessionError
from .models import Session, Task
from .session import SessionStore

logger = logging.getLogger(__name__)

AUTH_REJECTION_STATUSES = frozenset({401, 403})

FETCH_FAILED = "Could not fetch tasks."
CREATE_FAILED = "Failed to add task."
UPDATE_FAILED = "Failed to update task."
DELETE_FAILED = "Failed to delete task."
REGISTER_FAILED = "Registration failed."
LOGIN_FAILED = "Login failed."


def _response_error_message(response: requests.Response, default: str) -> str:
    """
    Extract the server's ``error`` field from a JSON response if possible.

    Args:
        response: The :class:`requests.Response` to inspect.
        default: Fallback message when the body is not JSON or the field is
            missing/blank.

    Returns:
        The extracted error string, or *default*.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    if not isinstance(payload, dict):
        return default
    message = payload.get("error")
    if isinstance(message, str) and message.strip():
        return message
    return default


def _task_path(task_id: str) -> str:
    """Path of one task; the id is percent-encoded as a single segment."""
    return f"/api/tasks/{quote(str(task_id), safe='')}"


class TaskApiClient:
    """
    Client for the task and auth endpoints.

    The client only reads the session store to build the authorization
    header.  It never clears it: an :class:`AuthenticationRejectedError`
    is raised instead and the session owner decides what to do.

    Args:
        base_url: Root URL of the remote service.
        session_store: Source of the bearer token.
        timeout: Per-request timeout in seconds, or ``None`` for the
            transport default.
    """

    def __init__(
        self,
        base_url: str,
        session_store: SessionStore,
        timeout: float | None = None,
    ):
        self.base_url = base_url
        self.session_store = session_store
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _auth_headers(self) -> dict[str, str]:
        """
        Build the headers for an authenticated call.

        Raises:
            MissingSessionError: If no token is stored; the caller must not
                send the request.
        """
        token = self.session_store.get().token
        if not token:
            raise MissingSessionError()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        failure_message: str,
        headers: dict[str, str],
        use_server_message: bool = False,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Send one request and raise a typed error unless it succeeded.

        Args:
            method: HTTP method.
            path: Endpoint path relative to ``base_url``.
            failure_message: Generic message for this operation.
            headers: Request headers.
            use_server_message: Prefer the response's ``error`` field over
                *failure_message* when present.
            **kwargs: Forwarded to :func:`requests.request` (e.g. ``json``).

        Returns:
            The successful :class:`requests.Response`.

        Raises:
            AuthenticationRejectedError: On 401 or 403.
            ApiError: On any other non-2xx status or a transport failure.
        """
        logger.info("%s %s", method, path)
        try:
            response = requests.request(
                method=method,
                url=self._url(path),
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc.__class__.__name__)
            raise ApiError(failure_message) from exc

        if 200 <= response.status_code < 300:
            return response

        message = failure_message
        if use_server_message:
            message = _response_error_message(response, failure_message)
        logger.warning("%s %s returned %s", method, path, response.status_code)

        if response.status_code in AUTH_REJECTION_STATUSES:
            raise AuthenticationRejectedError(message, response.status_code)
        raise ApiError(message, response.status_code)

    # -----------------------------------------------------------------
    # Task endpoints
    # -----------------------------------------------------------------

    def list_tasks(self) -> list[Task]:
        """
        Fetch the user's task list.

        Accepts either a bare JSON array or an object with a ``tasks``
        array.  An object without a ``tasks`` array is a failed fetch.

        Raises:
            MissingSessionError: If not logged in (nothing is sent).
            AuthenticationRejectedError: If the token was rejected.
            ApiError: For any other failure, including an undecodable body.
        """
        headers = self._auth_headers()
        response = self._request(
            "GET", "/api/tasks", failure_message=FETCH_FAILED, headers=headers
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(FETCH_FAILED, response.status_code) from exc

        if isinstance(payload, dict):
            payload = payload.get("tasks")
        if not isinstance(payload, list):
            raise ApiError(FETCH_FAILED, response.status_code)

        try:
            return [Task.from_api(item) for item in payload]
        except (KeyError, TypeError, AttributeError) as exc:
            raise ApiError(FETCH_FAILED, response.status_code) from exc

    def create_task(self, description: str) -> None:
        """Create a task; the caller has already trimmed *description*."""
        headers = self._auth_headers()
        self._request(
            "POST",
            "/api/tasks",
            failure_message=CREATE_FAILED,
            headers=headers,
            json={"description": description},
        )

    def delete_task(self, task_id: str) -> None:
        """Delete a task; success is decided by the response status only."""
        headers = self._auth_headers()
        self._request(
            "DELETE",
            _task_path(task_id),
            failure_message=DELETE_FAILED,
            headers=headers,
        )

    def set_task_completion(self, task_id: str, is_completed: bool) -> None:
        headers = self._auth_headers()
        self._request(
            "PUT",
            _task_path(task_id),
            failure_message=UPDATE_FAILED,
            headers=headers,
            json={"isCompleted": is_completed},
        )

    # -----------------------------------------------------------------
    # Auth endpoints
    # -----------------------------------------------------------------

    def register(self, username: str, password: str) -> None:
        """
        Create an account.

        Raises:
            ApiError: With the server's ``error`` text when present,
                otherwise a generic message.
        """
        self._request(
            "POST",
            "/api/auth/register",
            failure_message=REGISTER_FAILED,
            headers={"Content-Type": "application/json"},
            use_server_message=True,
            json={"username": username, "password": password},
        )

    def login(self, username: str, password: str) -> Session:
        """
        Exchange credentials for a token.

        Returns:
            A :class:`Session` built from ``{token, user: {username}}``.

        Raises:
            ApiError: With the server's ``error`` text when present,
                otherwise a generic message.  A success response without a
                token is treated as a failure.
        """
        response = self._request(
            "POST",
            "/api/auth/login",
            failure_message=LOGIN_FAILED,
            headers={"Content-Type": "application/json"},
            use_server_message=True,
            json={"username": username, "password": password},
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(LOGIN_FAILED, response.status_code) from exc

        token = payload.get("token") if isinstance(payload, dict) else None
        user = payload.get("user") if isinstance(payload, dict) else None
        if not token or not isinstance(user, dict):
            raise ApiError(LOGIN_FAILED, response.status_code)
        return Session(token=token, username=user.get("username"))
