from contextlib import contextmanager

import rich
from rich.markup import escape
import typer

from envsnap._src.exceptions import EnvsnapError


@contextmanager
def handle_errors():
    """Turn envsnap failures into a readable message and exit code 1."""
    try:
        yield
    except EnvsnapError as e:
        rich.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
