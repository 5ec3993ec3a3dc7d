"""
Page routes for the task client.

Serves the single task page and the form endpoints behind its controls.
Each POST route turns its form into a page event, dispatches it to a
:class:`~task_client.controller.TaskPage` built for the current request,
and redirects back to the page.  Reloading the page is what re-fetches the
task list, so every route performs at most one task-list request.

The session cookie plays the part of the browser's origin-scoped storage:
it holds the token, the username and the pending error banner.
"""

from __future__ import annotations

import logging

from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from ..api import TaskApiClient
from ..controller import TaskPage
from ..notifier import ErrorNotifier
from ..session import SessionStore
from ..view import ViewController, ViewState

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

TRUE_VALUES = frozenset({"true", "1", "on", "yes"})
FALSE_VALUES = frozenset({"false", "0", "off", "no"})


# =====================================================================
# Helper Functions
# =====================================================================


def _build_page(*, refresh_after_change: bool = False) -> TaskPage:
    """
    Assemble the page handlers for the current request.

    With ``SESSION_PERMANENT`` set the session cookie outlives the
    browser window, the way origin storage does.
    """
    session.permanent = current_app.config.get("SESSION_PERMANENT", True)
    store = SessionStore(session)
    return TaskPage(
        session_store=store,
        api=TaskApiClient(
            current_app.config["API_BASE_URL"],
            store,
            timeout=current_app.config.get("API_TIMEOUT"),
        ),
        view=ViewController(),
        notifier=ErrorNotifier(
            session, hide_after=current_app.config["ERROR_HIDE_SECONDS"]
        ),
        refresh_after_change=refresh_after_change,
    )


def _form_bool(name: str) -> bool | None:
    """Read a boolean form field; ``None`` when missing or unrecognised."""
    raw_value = request.form.get(name)
    if raw_value is None:
        return None
    value = raw_value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def _back_to_page(state: ViewState):
    """Carry any one-shot notice over the redirect and reload the page."""
    if state.notice:
        flash(state.notice, "success")
    return redirect(url_for("views.index"))


# =====================================================================
# Page Routes
# =====================================================================


@views_bp.route("/health", methods=["GET"])
def health_check():
    """Liveness probe; public and independent of the remote API."""
    return {"status": "healthy", "service": "task-client"}, 200


@views_bp.route("/", methods=["GET"])
def index():
    """
    Render the task page.

    Shows the login section when no token is stored; otherwise fetches the
    task list and shows the task section.  A pending error banner is
    rendered with the time it has left before hiding.
    """
    page = _build_page(refresh_after_change=True)
    state = page.dispatch("load")
    return render_template(
        "index.html",
        view=state,
        error_message=page.notifier.current(),
        error_remaining_ms=int(page.notifier.remaining() * 1000),
    )


@views_bp.route("/login", methods=["POST"])
def login():
    state = _build_page().dispatch(
        "login",
        username=request.form.get("username", ""),
        password=request.form.get("password", ""),
    )
    return _back_to_page(state)


@views_bp.route("/register", methods=["POST"])
def register():
    state = _build_page().dispatch(
        "register",
        username=request.form.get("username", ""),
        password=request.form.get("password", ""),
    )
    return _back_to_page(state)


@views_bp.route("/logout", methods=["POST"])
def logout():
    return _back_to_page(_build_page().dispatch("logout"))


@views_bp.route("/tasks", methods=["POST"])
def create_task():
    """Create a task from the page's input; blank input sends nothing."""
    state = _build_page().dispatch(
        "create_task", description=request.form.get("description", "")
    )
    return _back_to_page(state)


@views_bp.route("/tasks/<task_id>/toggle", methods=["POST"])
def toggle_task(task_id: str):
    """
    Flip a task's completion flag.

    The ``completed`` field is the row's state as rendered on the page when
    the button was clicked; the request sends its negation.
    """
    state = _build_page().dispatch(
        "toggle_task", task_id=task_id, displayed_completed=_form_bool("completed")
    )
    return _back_to_page(state)


@views_bp.route("/tasks/<task_id>/delete", methods=["POST"])
def delete_task(task_id: str):
    return _back_to_page(_build_page().dispatch("delete_task", task_id=task_id))
