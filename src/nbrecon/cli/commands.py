"""nbrecon CLI - single-resource host for the reconciler and lookup resolver.

Usage:
    nbrecon resources                               # List managed kinds and lookups
    nbrecon read vlan_group 42                      # Show one object
    nbrecon lookup prefix -f cidr=10.0.0.0/24       # Resolve exactly one object
    nbrecon apply vlan_group core.yaml              # Create or update, write state back
    nbrecon delete vlan_group core.yaml             # Delete, clear id in state file
    nbrecon import vlan_group 42 -o core.yaml       # Adopt an existing object

State files are YAML:
    kind: vlan_group
    id: "42"
    attributes:
      name: core
      slug: core
      tags: [net]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
import yaml
from rich.console import Console

from nbrecon import __version__
from nbrecon.cli.display import ResultRenderer
from nbrecon.core.exceptions import NetBoxSyncError, ValidationError
from nbrecon.core.logging_config import setup_logging
from nbrecon.resources import LOOKUPS, RESOURCES, get_lookup, get_resource
from nbrecon.schemas.resource import AttrType, ResourceSpec
from nbrecon.sync.lookup import LookupResolver
from nbrecon.sync.models import FilterPredicate, LocalState
from nbrecon.sync.reconciler import ResourceReconciler
from nbrecon.tools.netbox_tool import NetBoxAPITool

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="nbrecon",
    help="Declarative NetBox object reconciliation",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
renderer = ResultRenderer(console)

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


# ============================================
# Shared Options
# ============================================
UrlOption = Annotated[
    str | None,
    typer.Option("--url", help="NetBox URL (default: NETBOX_URL)"),
]

TokenOption = Annotated[
    str | None,
    typer.Option("--token", help="NetBox API token (default: NETBOX_TOKEN)"),
]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """nbrecon - converge NetBox objects to declared state."""
    setup_logging(verbose)


# ============================================
# Helpers
# ============================================
def _spec(kind: str, lookup: bool = False) -> ResourceSpec:
    try:
        return get_lookup(kind) if lookup else get_resource(kind)
    except KeyError as e:
        raise typer.BadParameter(str(e.args[0])) from e


def _parse_value(spec: ResourceSpec, name: str, raw: str) -> Any:
    """Convert a command-line string to the attribute's type."""
    try:
        attr = spec.attribute(name)
    except KeyError as e:
        raise typer.BadParameter(str(e.args[0])) from e
    if attr.type is AttrType.INT:
        try:
            return int(raw)
        except ValueError as e:
            raise typer.BadParameter(f"{name}: expected an integer, got {raw!r}") from e
    if attr.type is AttrType.BOOL:
        flag = raw.strip().lower()
        if flag in TRUE_VALUES:
            return True
        if flag in FALSE_VALUES:
            return False
        raise typer.BadParameter(f"{name}: expected a boolean, got {raw!r}")
    if attr.type in (AttrType.STRING_SET, AttrType.TAGS):
        return frozenset(part.strip() for part in raw.split(",") if part.strip())
    return raw


def load_state(spec: ResourceSpec, path: Path) -> LocalState:
    """Read a YAML state file into a validated LocalState."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    kind = data.get("kind", spec.kind)
    if kind != spec.kind:
        raise ValidationError([f"{path}: state file is for {kind!r}, not {spec.kind!r}"])
    remote_id = data.get("id") or ""
    return LocalState.from_config(spec, data.get("attributes") or {}, id=str(remote_id))


def save_state(state: LocalState, path: Path) -> None:
    """Write the explicitly configured attributes of a LocalState back as YAML."""
    data = {"kind": state.kind, "id": state.id, "attributes": state.to_config(explicit_only=True)}
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def _fail(error: Exception) -> NoReturn:
    details = None
    if isinstance(error, ValidationError):
        details = "\n".join(error.errors)
    renderer.render_error(str(error).splitlines()[0], details)
    raise typer.Exit(code=1)


# ============================================
# Commands
# ============================================
@app.command()
def version() -> None:
    """Show version."""
    console.print(f"nbrecon {__version__}")


@app.command()
def resources() -> None:
    """List managed resource kinds and lookups."""
    renderer.render_specs(RESOURCES, "Managed resources")
    renderer.render_specs(LOOKUPS, "Lookups")


@app.command()
def read(
    kind: str = typer.Argument(..., help="Resource kind"),
    remote_id: int = typer.Argument(..., help="NetBox object id"),
    url: UrlOption = None,
    token: TokenOption = None,
) -> None:
    """Show one NetBox object as local state."""
    spec = _spec(kind)
    try:
        state = ResourceReconciler(spec).import_state(NetBoxAPITool(url, token), remote_id)
    except NetBoxSyncError as e:
        _fail(e)
    renderer.render_state(state)


@app.command()
def lookup(
    kind: str = typer.Argument(..., help="Lookup kind"),
    filters: list[str] = typer.Option([], "--filter", "-f", help="name=value filter (repeatable)"),
    url: UrlOption = None,
    token: TokenOption = None,
) -> None:
    """Resolve a filter to exactly one NetBox object."""
    spec = _spec(kind, lookup=True)
    values: dict[str, Any] = {}
    for item in filters:
        name, sep, raw = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"filter must be name=value, got {item!r}")
        values[name.strip()] = _parse_value(spec, name.strip(), raw.strip())

    try:
        state = LookupResolver(spec).read(NetBoxAPITool(url, token), FilterPredicate(filters=values))
    except NetBoxSyncError as e:
        _fail(e)
    renderer.render_state(state)


@app.command()
def apply(
    kind: str = typer.Argument(..., help="Resource kind"),
    state_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML state file"),
    url: UrlOption = None,
    token: TokenOption = None,
) -> None:
    """Create or update one object, then write the converged state back."""
    spec = _spec(kind)
    reconciler = ResourceReconciler(spec)
    client = NetBoxAPITool(url, token)

    try:
        desired = load_state(spec, state_file)
        if desired.id:
            current = reconciler.read(client, desired.model_copy(deep=True))
            if not current.id:
                console.print(f"[yellow]{kind} {desired.id} no longer exists; recreating[/yellow]")
                desired.clear_id()
                reconciler.create(client, desired)
            else:
                changes = reconciler.changes(desired, current)
                renderer.render_changes(changes)
                if changes:
                    reconciler.update(client, desired)
                else:
                    desired = current
        else:
            reconciler.create(client, desired)
    except NetBoxSyncError as e:
        _fail(e)

    save_state(desired, state_file)
    renderer.render_state(desired)


@app.command()
def delete(
    kind: str = typer.Argument(..., help="Resource kind"),
    state_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML state file"),
    url: UrlOption = None,
    token: TokenOption = None,
) -> None:
    """Delete one object and clear the id in its state file."""
    spec = _spec(kind)
    try:
        state = load_state(spec, state_file)
        if not state.id:
            console.print(f"[dim]{kind} has no id; nothing to delete[/dim]")
            return
        ResourceReconciler(spec).delete(NetBoxAPITool(url, token), state)
    except NetBoxSyncError as e:
        _fail(e)
    save_state(state, state_file)
    console.print(f"[green]Deleted {kind}[/green]")


@app.command(name="import")
def import_(
    kind: str = typer.Argument(..., help="Resource kind"),
    remote_id: int = typer.Argument(..., help="NetBox object id"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write state file here"),
    url: UrlOption = None,
    token: TokenOption = None,
) -> None:
    """Adopt an existing NetBox object into a state file."""
    spec = _spec(kind)
    try:
        state = ResourceReconciler(spec).import_state(NetBoxAPITool(url, token), remote_id)
    except NetBoxSyncError as e:
        _fail(e)
    if out is not None:
        save_state(state, out)
        console.print(f"[green]Wrote {out}[/green]")
    renderer.render_state(state)


if __name__ == "__main__":
    app()
