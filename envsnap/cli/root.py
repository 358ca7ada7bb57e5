import typer
from typing import Optional
from typing_extensions import Annotated

from envsnap._src.data.local import load_snapshot
from envsnap._src.data.remote import load_remote_snapshot
from envsnap._src.log import setup_logging
from envsnap._src.models.snapshot import RestoreOptions
from envsnap._src.project import project_snapshot_path
from envsnap._src.restore import RestoreEngine
from envsnap._src.settings import load_settings
from envsnap.cli.errors import handle_errors
from envsnap.cli.snapshot import snapshot_command


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(
    snapshot_command,
    name="snapshot",
    help="take and inspect environment snapshots",
    rich_help_panel="Snapshot",
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        help="path to a yaml config file"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        help="logging level, overrides the configured one"
    ),
):
    """Capture and restore the package versions of an environment"""
    with handle_errors():
        settings = load_settings(config)
    setup_logging(log_level or settings.log_level)
    ctx.obj = settings


@app.command()
def restore(
    ctx: typer.Context,
    file: Annotated[Optional[str], typer.Option(
        help="path to a snapshot csv"
    )] = None,
    github: Annotated[Optional[str], typer.Option(
        help="owner/repo[/subpath] of a repository holding the snapshot"
    )] = None,
    path_in_repo: Annotated[Optional[str], typer.Option(
        help="snapshot path inside the repository"
    )] = None,
    stop_on_wrong_runtime_version: Annotated[bool, typer.Option(
        help="fail instead of warning when the python version differs"
    )] = False,
    strict: Annotated[bool, typer.Option(
        help="install exact versions even when a compatible newer one is installed"
    )] = False,
    skip_last: Annotated[bool, typer.Option(
        help="skip the last entry, usually the study package itself"
    )] = True,
    dry_run: Annotated[bool, typer.Option(
        help="only report what would be installed"
    )] = False,
):
    """Restore the environment to a snapshot.

    Without --file or --github, the snapshot stored in the current project is used.
    """
    settings = ctx.obj
    if file is not None and github is not None:
        raise typer.BadParameter("use only one of --file and --github")

    options = RestoreOptions(
        stop_on_wrong_runtime_version=stop_on_wrong_runtime_version,
        strict=strict,
        skip_last=skip_last,
        dry_run=dry_run,
    )

    with handle_errors():
        if github is not None:
            snapshot = load_remote_snapshot(
                github,
                path_in_repo or settings.snapshot_path,
                branch=settings.remote_branch,
                host=settings.remote_host,
            )
        elif file is not None:
            snapshot = load_snapshot(file)
        else:
            snapshot = load_snapshot(project_snapshot_path(settings.snapshot_path))

        engine = RestoreEngine.from_settings(settings)
        report = engine.restore(snapshot, options)

    if dry_run:
        for step in report.installed():
            print(f"+ {step.package}=={step.required_version}")
