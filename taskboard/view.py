from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .client import TaskClient, TaskClientError
from .schemas import TaskOut, TaskStatus


class TaskFilter(str, Enum):
    all = "all"
    todo = "todo"
    done = "done"

    @property
    def query(self) -> Optional[str]:
        return None if self is TaskFilter.all else self.value


@dataclass
class StatusMessage:
    """The one message area every action reports to."""

    text: str = ""
    is_error: bool = False

    def set(self, text: str, is_error: bool = True) -> None:
        self.text = text
        self.is_error = is_error

    @property
    def style(self) -> str:
        return "bold red" if self.is_error else "bold green"


class TaskView:
    """
    Renders the task list and runs the per-task actions.

    The active filter is passed to every call; each action re-fetches the
    whole list for that filter once it finishes.
    """

    def __init__(self, client: TaskClient, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console()
        self.message = StatusMessage()
        self.tasks: List[TaskOut] = []

    def render(self, task_filter: TaskFilter = TaskFilter.all) -> List[TaskOut]:
        task_filter = TaskFilter(task_filter)
        try:
            tasks = self.client.list_tasks(task_filter.query)
        except TaskClientError as exc:
            self.message.set(exc.message)
            self._print_message()
            return self.tasks

        self.tasks = tasks
        self.console.print(build_table(tasks, task_filter))
        self._print_message()
        return tasks

    def add(self, title: str, description: str = "", task_filter: TaskFilter = TaskFilter.all) -> List[TaskOut]:
        self.message.set("")
        try:
            self.client.create_task(title, description)
        except TaskClientError as exc:
            self.message.set(exc.message)
            self._print_message()
            return self.tasks
        self.message.set("Task added", is_error=False)
        return self.render(task_filter)

    def toggle(self, task: TaskOut, task_filter: TaskFilter = TaskFilter.all) -> List[TaskOut]:
        target = TaskStatus.todo if task.status == TaskStatus.done else TaskStatus.done
        try:
            self.client.set_status(task.id, target)
        except TaskClientError as exc:
            self.message.set(exc.message)
            self._print_message()
            return self.tasks
        self.message.set("Task updated", is_error=False)
        return self.render(task_filter)

    def delete(self, task: TaskOut, task_filter: TaskFilter = TaskFilter.all) -> List[TaskOut]:
        try:
            self.client.delete_task(task.id)
        except TaskClientError as exc:
            self.message.set(exc.message)
            self._print_message()
            return self.tasks
        self.message.set("Task deleted", is_error=False)
        return self.render(task_filter)

    def _print_message(self) -> None:
        if self.message.text:
            self.console.print(Text(self.message.text, style=self.message.style))


def build_table(tasks: List[TaskOut], task_filter: TaskFilter = TaskFilter.all) -> Table:
    table = Table(title=f"Tasks ({task_filter.value})", show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Description")
    table.add_column("Status")
    table.add_column("Created")

    if not tasks:
        table.add_row("", "No tasks found.", "", "", "")
        return table

    for task in tasks:
        done = task.status == TaskStatus.done
        table.add_row(
            str(task.id),
            Text(task.title),
            Text(task.description or "No description"),
            "[green]done[/green]" if done else "todo",
            task.created_at,
            style="strike dim" if done else None,
        )
    return table
