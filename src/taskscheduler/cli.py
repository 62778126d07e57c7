"""CLI interface for taskscheduler."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskscheduler import __version__
from taskscheduler.config import SchedulerConfig
from taskscheduler.errors import (
    StoreError,
    TaskSchedulerError,
    ValidationError,
)
from taskscheduler.export import export_tasks
from taskscheduler.logging_setup import setup_logging
from taskscheduler.models import (
    DATE_FORMAT,
    TIME_FORMAT,
    Priority,
    Status,
    combine_due,
    field_text,
    format_due,
)
from taskscheduler.ordering import Urgency
from taskscheduler.repository import TaskRepository
from taskscheduler.session import EditSession
from taskscheduler.store import RecordStore

console = Console()

URGENCY_STYLES = {
    Urgency.DONE: "green",
    Urgency.OVERDUE: "red",
    Urgency.DUE_SOON: "bold yellow",
    Urgency.NORMAL: "",
}


def _fail(ctx: click.Context, error: TaskSchedulerError) -> None:
    """Report ``error`` and exit: 2 for store failures, 1 otherwise."""
    if isinstance(error, StoreError):
        console.print(f"[red]Store error:[/red] {escape(str(error))}")
        ctx.exit(2)
    if isinstance(error, ValidationError):
        console.print(f"[red]Invalid {error.field}:[/red] {escape(error.message)}")
    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")
    ctx.exit(1)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="taskscheduler")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default .taskscheduler/config.json)",
)
@click.option("--store", "store_path", type=click.Path(dir_okay=False), help="Task CSV file")
@click.option("--verbose", "-v", is_flag=True, help="Log operations to stderr")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    store_path: str | None,
    verbose: bool,
) -> None:
    """taskscheduler - a task list kept in a CSV file.

    Tasks are listed by priority (High, Medium, Low), then by due date.

    \b
    Quick start:
      tasks init                              # Create an empty task file
      tasks add "Write report" --date 14/06/24 --time 09:30
      tasks set 1 --priority High
      tasks list
    """
    ctx.ensure_object(dict)
    config = SchedulerConfig.load(config_path)
    if store_path:
        config.store.path = store_path

    setup_logging("DEBUG" if verbose else config.logging.level, config.logging.file)

    store = RecordStore(config.store.path)
    ctx.obj["config"] = config
    ctx.obj["store"] = store
    ctx.obj["repository"] = TaskRepository(store, due_soon_days=config.display.due_soon_days)

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing task file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create an empty task file."""
    store: RecordStore = ctx.obj["store"]

    try:
        created = store.initialize(force=force)
    except TaskSchedulerError as e:
        _fail(ctx, e)
        return

    if not created:
        console.print(
            f"[yellow]Task file already exists:[/yellow] {store.path}. "
            "Use --force to start over."
        )
        return

    console.print(f"[green]Created task file:[/green] {store.path}")


@main.command()
@click.argument("title")
@click.option("--date", "-d", "due_date", help="Due date as dd/mm/yy (default today)")
@click.option("--time", "-t", "due_time", help="Due time as HH:MM (24-hour)")
@click.pass_context
def add(ctx: click.Context, title: str, due_date: str | None, due_time: str | None) -> None:
    """Add a task. New tasks start at Medium priority, In process."""
    config: SchedulerConfig = ctx.obj["config"]
    session = EditSession(ctx.obj["repository"])

    try:
        due = combine_due(
            due_date if due_date is not None else date.today(),
            due_time if due_time is not None else config.display.default_time,
        )
        task = session.add(title, due)
    except TaskSchedulerError as e:
        _fail(ctx, e)
        return

    console.print(
        f"[green]Added task {task.id}:[/green] {escape(task.title)} "
        f"[dim](due {format_due(task.due)})[/dim]"
    )


@main.command("list")
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """Show tasks in priority order, coloured by urgency."""
    repository: TaskRepository = ctx.obj["repository"]

    try:
        rows = repository.list_with_urgency()
    except TaskSchedulerError as e:
        _fail(ctx, e)
        return

    if not rows:
        console.print("[dim]No tasks.[/dim] Add one with [cyan]tasks add[/cyan]")
        return

    table = Table(title="Tasks", show_header=True)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Due")
    table.add_column("Priority")
    table.add_column("Status")

    for task, urgency in rows:
        table.add_row(
            str(task.id),
            escape(task.title),
            format_due(task.due),
            escape(field_text(task.priority)),
            escape(field_text(task.status)),
            style=URGENCY_STYLES[urgency] or None,
        )

    console.print(table)


@main.command("set")
@click.argument("task_id", type=int)
@click.option(
    "--priority",
    "-p",
    type=click.Choice([p.value for p in Priority], case_sensitive=False),
    help="New priority",
)
@click.option(
    "--status",
    "-s",
    type=click.Choice([s.value for s in Status], case_sensitive=False),
    help="New status",
)
@click.pass_context
def set_command(
    ctx: click.Context,
    task_id: int,
    priority: str | None,
    status: str | None,
) -> None:
    """Change the priority and/or status of a task."""
    repository: TaskRepository = ctx.obj["repository"]

    if priority is None and status is None:
        console.print("[yellow]Nothing to update.[/yellow] Pass --priority and/or --status.")
        ctx.exit(1)

    try:
        task = repository.update_fields(task_id, priority=priority, status=status)
    except TaskSchedulerError as e:
        _fail(ctx, e)
        return

    console.print(
        f"[green]Updated task {task.id}:[/green] "
        f"{field_text(task.priority)}, {field_text(task.status)}"
    )


@main.command()
@click.argument("task_id", type=int)
@click.option("--title", help="New title")
@click.option("--date", "-d", "due_date", help="New due date as dd/mm/yy")
@click.option("--time", "-t", "due_time", help="New due time as HH:MM")
@click.pass_context
def edit(
    ctx: click.Context,
    task_id: int,
    title: str | None,
    due_date: str | None,
    due_time: str | None,
) -> None:
    """Edit title and due date. The task goes back to In process.

    Fields not given keep their current values.
    """
    session = EditSession(ctx.obj["repository"])

    try:
        current = session.begin(task_id)
        due = combine_due(
            due_date if due_date is not None else current.due.strftime(DATE_FORMAT),
            due_time if due_time is not None else current.due.strftime(TIME_FORMAT),
        )
        task = session.commit(title if title is not None else current.title, due)
    except TaskSchedulerError as e:
        session.cancel()
        _fail(ctx, e)
        return

    console.print(
        f"[green]Saved task {task.id}:[/green] {escape(task.title)} "
        f"[dim](due {format_due(task.due)})[/dim]"
    )


@main.command("rm")
@click.argument("task_id", type=int)
@click.pass_context
def remove(ctx: click.Context, task_id: int) -> None:
    """Delete a task by id."""
    session = EditSession(ctx.obj["repository"])

    try:
        task = session.delete(task_id)
    except TaskSchedulerError as e:
        _fail(ctx, e)
        return

    console.print(f"[green]Deleted task {task.id}:[/green] {escape(task.title)}")


@main.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.pass_context
def export(ctx: click.Context, path: Path | None) -> None:
    """Export tasks in display order to a CSV file."""
    config: SchedulerConfig = ctx.obj["config"]
    repository: TaskRepository = ctx.obj["repository"]
    target = path or Path(config.store.export_path)

    try:
        tasks = repository.list_ordered()
    except TaskSchedulerError as e:
        _fail(ctx, e)
        return

    if not export_tasks(tasks, target):
        console.print(f"[red]Export failed:[/red] could not write {target}")
        ctx.exit(1)

    console.print(f"[green]Exported {len(tasks)} tasks to[/green] {target}")


if __name__ == "__main__":
    main()
