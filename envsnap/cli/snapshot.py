import typer
from typing import Optional

from rich.table import Table
import rich

from envsnap._src.data.local import load_snapshot, save_snapshot
from envsnap._src.models.snapshot import Snapshot
from envsnap._src.project import insert_snapshot_in_project
from envsnap._src.snapshot import SnapshotBuilder
from envsnap.cli.errors import handle_errors


snapshot_command = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def print_snapshot(snapshot: Snapshot, title: str = "Snapshot"):
    table = Table(title=title)
    table.add_column("package", justify="left", no_wrap=True)
    table.add_column("version", justify="left", no_wrap=True)

    for entry in snapshot.entries:
        table.add_row(entry.package, entry.version)

    rich.print(table)


@snapshot_command.command()
def take(
    ctx: typer.Context,
    root: str = typer.Argument(
        help="name of the root package"
    ),
    output: Optional[str] = typer.Option(
        None,
        help="path to write the snapshot csv to"
    ),
):
    """Record the versions of a package and all of its dependencies.

    If no output is specified the snapshot is printed.
    """
    with handle_errors():
        snapshot = SnapshotBuilder().build(root)
        if output is None:
            print_snapshot(snapshot, title=f"Snapshot of {root}")
        else:
            save_snapshot(output, snapshot)


@snapshot_command.command()
def insert(
    ctx: typer.Context,
    root: str = typer.Argument(
        help="name of the root package"
    ),
    path: Optional[str] = typer.Option(
        None,
        help="snapshot path, relative to the project root"
    ),
):
    """Store a snapshot of a package in the current project"""
    settings = ctx.obj
    with handle_errors():
        written = insert_snapshot_in_project(root, path=path or settings.snapshot_path)
    rich.print(f"snapshot written to {written}")


@snapshot_command.command()
def show(
    ctx: typer.Context,
    path: str = typer.Argument(
        help="path to a snapshot csv"
    ),
):
    """List the packages in a stored snapshot"""
    with handle_errors():
        snapshot = load_snapshot(path)
    print_snapshot(snapshot, title=path)


@snapshot_command.command()
def diff(
    ctx: typer.Context,
    first: str = typer.Argument(
        help="path to the first snapshot"
    ),
    second: str = typer.Argument(
        help="path to the snapshot to compare against"
    ),
):
    """Show the packages whose version differs between two snapshots"""
    with handle_errors():
        changes = load_snapshot(first).diff(load_snapshot(second))

    for name, ours, theirs in changes:
        if ours is None:
            print(f"+ {name} {theirs}")
        elif theirs is None:
            print(f"- {name} {ours}")
        else:
            print(f"~ {name} {ours} -> {theirs}")
