import argparse
import os
import sys

from rich.console import Console

from .client import DEFAULT_API_URL, TaskClient, TaskClientError
from .view import TaskFilter, TaskView

console = Console()


def print_error(message):
    console.print(f"[bold red]Error:[/bold red] {message}", highlight=False)


def _find_task(view, task_id):
    try:
        return view.client.get_task(task_id)
    except TaskClientError as e:
        view.message.set(e.message)
        print_error(e.message)
        return None


def handle_list(view, args):
    view.render(args.filter)


def handle_add(view, args):
    view.add(args.title, args.description, args.filter)


def handle_toggle(view, args):
    task = _find_task(view, args.task_id)
    if task is not None:
        view.toggle(task, args.filter)


def handle_delete(view, args):
    task = _find_task(view, args.task_id)
    if task is not None:
        view.delete(task, args.filter)


def build_parser():
    parser = argparse.ArgumentParser(prog="taskboard", description="Manage tasks on a taskboard server.")
    parser.add_argument(
        "--api-url",
        default=os.environ.get("TASKBOARD_API_URL", DEFAULT_API_URL),
        help="Base URL of the task API (default: $TASKBOARD_API_URL or %(default)s)",
    )
    parser.add_argument(
        "--filter",
        choices=[f.value for f in TaskFilter],
        default=TaskFilter.all.value,
        help="Which tasks to show after the command runs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show tasks")
    list_parser.set_defaults(func=handle_list)

    add_parser = subparsers.add_parser("add", help="Create a task")
    add_parser.add_argument("title")
    add_parser.add_argument("-d", "--description", default="")
    add_parser.set_defaults(func=handle_add)

    toggle_parser = subparsers.add_parser("toggle", help="Flip a task between todo and done")
    toggle_parser.add_argument("task_id", type=int)
    toggle_parser.set_defaults(func=handle_toggle)

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", type=int)
    delete_parser.set_defaults(func=handle_delete)

    return parser


def main(argv=None, client=None):
    args = build_parser().parse_args(argv)
    client = client or TaskClient(args.api_url)
    with client:
        view = TaskView(client, console=console)
        args.func(view, args)
        return 1 if view.message.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
