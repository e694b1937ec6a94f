"""Command-line interface for svnauto."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import tomli_w
import typer
from rich.console import Console
from rich.table import Table

from .client import SvnClient
from .config import DEFAULT_CONFIG_FILENAME, ConfigError, load_config
from .errors import SvnError
from .logs import setup_logging
from .models import CheckoutResult, ItemStatus, PathStatus
from .status import DEFAULT_MAX_DEPTH

app = typer.Typer(help="Subversion automation with robust status resolution")
ignore_app = typer.Typer(help="Manage svn:ignore values on a directory", no_args_is_help=True)
prop_app = typer.Typer(help="Read and change svn properties", no_args_is_help=True)
app.add_typer(ignore_app, name="ignore")
app.add_typer(prop_app, name="prop")
console = Console()

STATUS_STYLES = {
    ItemStatus.NONE: "dim",
    ItemStatus.NOT_WORKING_COPY: "dim",
    ItemStatus.NO_MODIFICATIONS: "green",
    ItemStatus.ADDED: "cyan",
    ItemStatus.MODIFIED: "yellow",
    ItemStatus.MERGED: "yellow",
    ItemStatus.REPLACED: "yellow",
    ItemStatus.DELETED: "magenta",
    ItemStatus.UNVERSIONED: "blue",
    ItemStatus.IGNORED: "dim",
    ItemStatus.CONFLICTED: "red",
    ItemStatus.MISSING: "red",
    ItemStatus.OBSTRUCTED: "red",
    ItemStatus.INCOMPLETE: "red",
}


@dataclass
class CliState:
    config: Path | None = None


def _load_client(ctx: typer.Context) -> SvnClient:
    state: CliState = ctx.obj or CliState()
    return SvnClient(load_config(state.config))


def _handle_error(exc: Exception) -> None:
    if isinstance(exc, ConfigError):
        message = str(exc)
        console.print(f"[red]{message}[/red]")
        if "does not exist" in message:
            console.print("[yellow]Use 'svnauto init --path <path>' to create a configuration file.[/yellow]")
        raise typer.Exit(code=1)
    if isinstance(exc, (SvnError, ValueError)):
        # svn output is echoed verbatim, so it must not be read as markup.
        console.print(str(exc), markup=False, highlight=False, style="red")
        raise typer.Exit(code=1)
    raise exc


def _styled(status: ItemStatus) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


def _format_statuses(rows: Iterable[tuple[str, ItemStatus]]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path", overflow="fold")
    table.add_column("Status")

    for path, status in rows:
        table.add_row(path, _styled(status))

    console.print(table)


def _format_path_statuses(entries: Iterable[PathStatus]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path", overflow="fold")
    table.add_column("Status")
    table.add_column("Properties")

    for entry in entries:
        table.add_row(entry.path, _styled(entry.status), _styled(entry.properties))

    console.print(table)


def _format_checkout(result: CheckoutResult) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Action")
    table.add_column("Path", overflow="fold")

    for entry in result.entries:
        table.add_row(entry.status.value, entry.relative_path)

    console.print(table)
    console.print(f"[green]Checked out revision {result.revision}.[/green]")


def _format_values(values: Iterable[str]) -> None:
    values = list(values)
    if not values:
        console.print("[yellow](no values)[/yellow]")
        return
    for value in values:
        console.print(value, markup=False, highlight=False)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to svnauto.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every svn invocation"),
) -> None:
    """Subversion automation with robust status resolution."""

    setup_logging(verbose)
    ctx.obj = CliState(config=config)


@app.command()
def init(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILENAME),
        "--path",
        "-p",
        help="Path to write the configuration file",
        dir_okay=False,
        writable=True,
    ),
    svn: str = typer.Option("svn", "--svn", help="svn executable to record in the template"),
    svnversion: str = typer.Option("svnversion", "--svnversion", help="svnversion executable to record"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config if present"),
) -> None:
    """Create a starter svnauto configuration file."""

    if config.exists() and not force:
        console.print(f"[red]Configuration '{config}' already exists. Use --force to overwrite.[/red]")
        raise typer.Exit(code=1)

    data = {
        "tools": {"svn": svn, "svnversion": svnversion},
        "settings": {"max_status_depth": DEFAULT_MAX_DEPTH},
    }
    buffer = io.StringIO()
    buffer.write("# svnauto configuration\n\n")
    buffer.write("# [settings] timeout = 60.0 bounds each svn invocation in seconds.\n")
    buffer.write(tomli_w.dumps(data))

    config.parent.mkdir(parents=True, exist_ok=True)
    config.write_text(buffer.getvalue())
    console.print(f"[green]Created '{config}'.[/green]")


@app.command()
def status(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(..., help="Files or directories to inspect"),
) -> None:
    """Show the resolved working copy status of each path."""

    try:
        client = _load_client(ctx)
        _format_statuses((str(path), client.status(path)) for path in paths)
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Working copy directory"),
) -> None:
    """List the status of every entry below a working copy path."""

    try:
        client = _load_client(ctx)
        entries = client.statuses(path)
        _format_path_statuses(entries)
        if client.has_uncommitted_changes(path):
            console.print("[yellow]The working copy has uncommitted changes.[/yellow]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def add(ctx: typer.Context, paths: list[Path] = typer.Argument(...)) -> None:
    """Schedule paths for addition."""

    try:
        client = _load_client(ctx)
        for path in paths:
            client.add(path)
            console.print(f"[green]Added {path}[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def delete(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(...),
    force: bool = typer.Option(False, "--force", help="Delete even when the path has local modifications"),
) -> None:
    """Schedule paths for deletion."""

    try:
        client = _load_client(ctx)
        for path in paths:
            client.delete(path, force=force)
            console.print(f"[green]Deleted {path}[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def revert(ctx: typer.Context, paths: list[Path] = typer.Argument(...)) -> None:
    """Undo local changes to paths."""

    try:
        client = _load_client(ctx)
        for path in paths:
            client.revert(path)
            console.print(f"[green]Reverted {path}[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def commit(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    message: str = typer.Option(..., "--message", "-m", help="Commit log message"),
) -> None:
    """Commit a path and print the new revision."""

    try:
        client = _load_client(ctx)
        revision = client.commit(path, message)
        console.print(f"[green]Committed revision {revision}.[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def update(ctx: typer.Context, path: Path = typer.Argument(Path("."))) -> None:
    """Update a working copy path and print the revision reached."""

    try:
        client = _load_client(ctx)
        revision = client.update(path)
        console.print(f"[green]At revision {revision}.[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def checkout(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Repository URL"),
    path: Path = typer.Argument(..., help="Destination directory"),
    revision: int | None = typer.Option(None, "--revision", "-r", help="Revision to check out"),
) -> None:
    """Check out a repository URL into a directory."""

    try:
        client = _load_client(ctx)
        _format_checkout(client.checkout(url, path, revision=revision))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def revision(ctx: typer.Context, path: Path = typer.Argument(Path("."))) -> None:
    """Print the highest revision present in a working copy."""

    try:
        client = _load_client(ctx)
        console.print(str(client.latest_revision(path)))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def version(ctx: typer.Context) -> None:
    """Print the version of the configured svn executable."""

    try:
        client = _load_client(ctx)
        console.print(client.version())
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@ignore_app.command("list")
def ignore_list(ctx: typer.Context, path: Path = typer.Argument(Path("."))) -> None:
    """Show the svn:ignore values of a directory."""

    try:
        client = _load_client(ctx)
        _format_values(client.get_svn_ignore_values(path))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@ignore_app.command("add")
def ignore_add(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    values: list[str] = typer.Argument(..., help="Patterns to ignore"),
) -> None:
    """Add patterns to svn:ignore; patterns already present are left alone."""

    try:
        client = _load_client(ctx)
        for value in values:
            client.add_svn_ignore_value(path, value)
        _format_values(client.get_svn_ignore_values(path))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@ignore_app.command("remove")
def ignore_remove(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    values: list[str] = typer.Argument(..., help="Patterns to stop ignoring"),
) -> None:
    """Remove patterns from svn:ignore, deleting the property once it is empty."""

    try:
        client = _load_client(ctx)
        for value in values:
            client.remove_svn_ignore_value(path, value)
        _format_values(client.get_svn_ignore_values(path))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@prop_app.command("get")
def prop_get(ctx: typer.Context, path: Path = typer.Argument(...), name: str = typer.Argument(...)) -> None:
    """Print the raw value of a property."""

    try:
        client = _load_client(ctx)
        console.print(client.get_property(path, name), markup=False, highlight=False)
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@prop_app.command("values")
def prop_values(ctx: typer.Context, path: Path = typer.Argument(...), name: str = typer.Argument(...)) -> None:
    """Print a property's values one per line."""

    try:
        client = _load_client(ctx)
        _format_values(client.get_property_values(path, name))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@prop_app.command("set")
def prop_set(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    name: str = typer.Argument(...),
    value: str = typer.Argument(...),
) -> None:
    """Set a property to a raw value."""

    try:
        client = _load_client(ctx)
        client.set_property(path, name, value)
        console.print(f"[green]Set {name} on {path}[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@prop_app.command("delete")
def prop_delete(ctx: typer.Context, path: Path = typer.Argument(...), name: str = typer.Argument(...)) -> None:
    """Delete a property; deleting an absent property is not an error."""

    try:
        client = _load_client(ctx)
        client.delete_property(path, name)
        console.print(f"[green]Deleted {name} from {path}[/green]")
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@prop_app.command("add")
def prop_add(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    name: str = typer.Argument(...),
    value: str = typer.Argument(...),
) -> None:
    """Add one value to a multi-line property."""

    try:
        client = _load_client(ctx)
        client.add_property_value(path, name, value)
        _format_values(client.get_property_values(path, name))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@prop_app.command("remove")
def prop_remove(
    ctx: typer.Context,
    path: Path = typer.Argument(...),
    name: str = typer.Argument(...),
    value: str = typer.Argument(...),
) -> None:
    """Remove one value from a multi-line property."""

    try:
        client = _load_client(ctx)
        client.remove_property_value(path, name, value)
        _format_values(client.get_property_values(path, name))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


def run() -> None:
    """Entry point used for console_script bindings."""

    app()
