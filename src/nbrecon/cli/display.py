"""Rich rendering helpers for the nbrecon CLI."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nbrecon.schemas.resource import ResourceSpec
from nbrecon.sync.models import LocalState


def _fmt(value: Any) -> str:
    if isinstance(value, (set, frozenset)):
        return escape(", ".join(sorted(value))) or "[dim]∅[/dim]"
    if value == "" or value is None:
        return "[dim]\"\"[/dim]"
    return escape(str(value))


class ResultRenderer:
    """Render states, specs, diffs and errors."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def render_state(self, state: LocalState, title: str | None = None) -> None:
        """Render one resource state as an attribute table."""
        status = f"id={state.id}" if state.id else "[yellow]absent[/yellow]"
        table = Table(title=title or f"{state.kind} ({status})", show_lines=False)
        table.add_column("attribute", style="cyan")
        table.add_column("value")
        for name in sorted(state.attributes):
            table.add_row(name, _fmt(state.attributes[name]))
        self.console.print(table)

    def render_specs(self, specs: dict[str, ResourceSpec], title: str) -> None:
        """Render a catalogue of resource specs."""
        table = Table(title=title, show_lines=True)
        table.add_column("kind", style="bold")
        table.add_column("endpoint")
        table.add_column("attributes")
        for kind, spec in sorted(specs.items()):
            attrs = ", ".join(f"{a.name}:{a.type.value}" + ("*" if a.required else "") for a in spec.attributes)
            table.add_row(kind, spec.endpoint, attrs)
        self.console.print(table)

    def render_changes(self, changes: dict[str, tuple[Any, Any]]) -> None:
        """Render pending attribute changes."""
        if not changes:
            self.console.print("[green]No changes.[/green]")
            return
        table = Table(title="Changes", show_lines=False)
        table.add_column("attribute", style="cyan")
        table.add_column("remote", style="red")
        table.add_column("declared", style="green")
        for name, (want, have) in sorted(changes.items()):
            table.add_row(name, _fmt(have), _fmt(want))
        self.console.print(table)

    def render_error(self, message: str, details: str | None = None) -> None:
        """Render an error message."""
        content = f"[bold red]{escape(message)}[/bold red]"
        if details:
            content += f"\n\n[dim]{escape(details)}[/dim]"
        self.console.print(Panel(content, title="[bold red]Error[/bold red]", border_style="red"))
