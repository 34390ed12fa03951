"""Views over a store snapshot: HTML markup and rich terminal output."""

from __future__ import annotations

from jinja2 import BaseLoader, Environment
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tasklist.models import TaskFilter
from tasklist.store import StoreSnapshot

HTML_TEMPLATE = """\
<section class="todo-app">
  <div class="filters">
{%- for value in filters %}
    <button type="button" class="filter-btn{% if value == current %} active{% endif %}" data-filter="{{ value }}" aria-pressed="{{ 'true' if value == current else 'false' }}">{{ value | capitalize }}</button>
{%- endfor %}
  </div>
  <ul id="task-list">
{%- for task in tasks %}
    <li class="task-item{% if task.completed %} completed{% endif %}" data-id="{{ task.id }}">
      <div class="task-left">
        <input type="checkbox" class="task-checkbox"{% if task.completed %} checked{% endif %} aria-label="Toggle task: {{ task.text }}">
        <span class="task-text">{{ task.text }}</span>
      </div>
      <button type="button" class="btn icon" aria-label="Delete task: {{ task.text }}">&#10005;</button>
    </li>
{%- endfor %}
  </ul>
  <p id="empty-state" style="display: {{ 'block' if empty else 'none' }}">No tasks to show.</p>
  <div class="counters">
    <span id="total-count">Total: {{ counts.total }}</span>
    <span id="active-count">Active: {{ counts.active }}</span>
    <span id="completed-count">Completed: {{ counts.completed }}</span>
  </div>
</section>
"""

_env = Environment(loader=BaseLoader(), autoescape=True)


def render_html(snapshot: StoreSnapshot) -> str:
    """Render the visible tasks, empty indicator and counters as HTML."""
    template = _env.from_string(HTML_TEMPLATE)
    return template.render(
        filters=[f.value for f in TaskFilter],
        current=snapshot.filter.value,
        tasks=snapshot.visible,
        empty=snapshot.empty,
        counts=snapshot.counts,
    )


def task_table(snapshot: StoreSnapshot) -> Table:
    """Build a table of the visible tasks."""
    table = Table(title=f"Tasks ({snapshot.filter.value})", show_header=True)
    table.add_column("", width=1)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Task", style="white")

    for task in snapshot.visible:
        if task.completed:
            table.add_row("[green]✓[/green]", Text(task.id), Text(task.text, style="strike dim"))
        else:
            table.add_row("○", Text(task.id), Text(task.text))

    return table


def format_counts(snapshot: StoreSnapshot) -> str:
    counts = snapshot.counts
    return (
        f"[cyan]Total:[/cyan] {counts.total}  "
        f"[cyan]Active:[/cyan] {counts.active}  "
        f"[cyan]Completed:[/cyan] {counts.completed}"
    )


class ConsoleView:
    """Store observer that redraws the list on a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def __call__(self, snapshot: StoreSnapshot) -> None:
        self.show(snapshot)

    def show(self, snapshot: StoreSnapshot) -> None:
        if snapshot.empty:
            self.console.print("[dim]No tasks to show.[/dim]")
        else:
            self.console.print(task_table(snapshot))
        self.console.print(format_counts(snapshot))
