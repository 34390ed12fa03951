"""CLI interface for tasklist."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from tasklist import __version__
from tasklist.config import CONFIG_FILE, TasklistConfig
from tasklist.logging_setup import setup_logging
from tasklist.models import TaskFilter
from tasklist.persistence import TaskPersistence
from tasklist.render import ConsoleView, format_counts, render_html
from tasklist.storage import JsonFileStorage
from tasklist.store import TaskStore

console = Console()

FILTER_CHOICES = click.Choice([f.value for f in TaskFilter])


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tasklist")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: {CONFIG_FILE})",
)
@click.option(
    "--storage",
    "storage_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Storage file, overrides the configured path",
)
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, storage_path: Path | None) -> None:
    """tasklist - a small offline task list.

    \b
    Examples:
      tasklist add Buy milk
      tasklist list --filter active
      tasklist done <task-id>
      tasklist rm <task-id>
    """
    try:
        config = TasklistConfig.load(config_path)
    except ValueError as e:
        console.print(f"[red]Invalid config:[/red] {escape(str(e))}")
        ctx.exit(1)

    setup_logging(config.logging.level, config.logging.file)

    storage = JsonFileStorage(storage_path or Path(config.storage.path))
    persistence = TaskPersistence(storage, key=config.storage.key)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = TaskStore.open(persistence)

    # If no subcommand, show help
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, text: tuple[str, ...]) -> None:
    """Add a task to the top of the list."""
    store: TaskStore = ctx.obj["store"]
    store.subscribe(ConsoleView(console))

    task = store.add_task(" ".join(text))
    if task is None:
        console.print("[dim]Nothing to add - task text is empty.[/dim]")
        return

    console.print(f"[green]Added:[/green] {task.id}")


@main.command()
@click.argument("task_id")
@click.pass_context
def done(ctx: click.Context, task_id: str) -> None:
    """Toggle a task between active and completed."""
    store: TaskStore = ctx.obj["store"]
    store.subscribe(ConsoleView(console))
    store.toggle_complete(task_id)


@main.command("rm")
@click.argument("task_id")
@click.pass_context
def remove(ctx: click.Context, task_id: str) -> None:
    """Delete a task."""
    store: TaskStore = ctx.obj["store"]
    store.subscribe(ConsoleView(console))
    store.delete_task(task_id)


@main.command("list")
@click.option(
    "--filter", "-f", "filter_type", type=FILTER_CHOICES, default="all", help="Tasks to show"
)
@click.pass_context
def list_tasks(ctx: click.Context, filter_type: str) -> None:
    """Show tasks, newest first."""
    store: TaskStore = ctx.obj["store"]
    store.subscribe(ConsoleView(console))
    store.filter_tasks(filter_type)


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show task counters."""
    store: TaskStore = ctx.obj["store"]
    console.print(format_counts(store.snapshot()))


@main.command()
@click.option(
    "--filter", "-f", "filter_type", type=FILTER_CHOICES, default="all", help="Tasks to show"
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write HTML to this file instead of stdout",
)
@click.pass_context
def html(ctx: click.Context, filter_type: str, output: Path | None) -> None:
    """Render the task list as HTML."""
    store: TaskStore = ctx.obj["store"]
    store.filter_tasks(filter_type)
    markup = render_html(store.snapshot())

    if output is None:
        click.echo(markup, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markup)
    console.print(f"[green]Wrote:[/green] {output}")


if __name__ == "__main__":
    main()
