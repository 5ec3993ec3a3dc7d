"""
View controller for the task page.

Turns data into a :class:`ViewState` that the Jinja template renders.  The
controller never talks to the network: the page handlers fetch tasks and
hand them to :meth:`ViewController.render_task_list`.  Keeping the view as
plain data means every render instruction can be asserted without a
browser.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import Task

EMPTY_PLACEHOLDER = "No tasks yet. Add one above!"
COMPLETE_LABEL = "Complete"
UNDO_LABEL = "Undo"


@dataclass(frozen=True)
class TaskRow:
    """
    One rendered row of the task list.

    Attributes:
        task_id: Identity of the row, carried as ``data-id`` in markup.
        description: Task text.
        is_completed: Completion state as displayed.
        toggle_label: ``"Undo"`` for completed tasks, ``"Complete"`` otherwise.
    """

    task_id: str
    description: str
    is_completed: bool
    toggle_label: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskRow":
        return cls(
            task_id=task.id,
            description=task.description,
            is_completed=task.is_completed,
            toggle_label=UNDO_LABEL if task.is_completed else COMPLETE_LABEL,
        )


@dataclass
class ViewState:
    """Everything the page template needs for one render."""

    auth_visible: bool = True
    tasks_visible: bool = False
    user_info: str = ""
    rows: list[TaskRow] = field(default_factory=list)
    placeholder: str | None = None
    notice: str | None = None


class ViewController:
    """Owns the :class:`ViewState` of one page render."""

    def __init__(self) -> None:
        self.state = ViewState()

    def render_task_list(self, tasks: list[Task]) -> None:
        """
        Replace the task list entirely.

        An empty list renders no rows and the placeholder text; otherwise
        one row per task and no placeholder.
        """
        self.state.rows = [TaskRow.from_task(task) for task in tasks]
        self.state.placeholder = None if tasks else EMPTY_PLACEHOLDER

    def clear_task_list(self) -> None:
        self.state.rows = []
        self.state.placeholder = None

    def set_authenticated_view(self, is_authenticated: bool, username: str | None = None) -> None:
        """
        Switch between the login section and the task section.

        Going anonymous also empties the list so no task data stays on the
        page without a session.
        """
        self.state.auth_visible = not is_authenticated
        self.state.tasks_visible = is_authenticated
        if is_authenticated:
            self.state.user_info = f"Logged in as: {username or ''}"
        else:
            self.state.user_info = ""
            self.clear_task_list()

    def displayed_completion(self, task_id: str) -> bool | None:
        """Return the rendered completion state of a row, ``None`` if absent."""
        for row in self.state.rows:
            if row.task_id == task_id:
                return row.is_completed
        return None

    def show_notice(self, text: str) -> None:
        self.state.notice = text
