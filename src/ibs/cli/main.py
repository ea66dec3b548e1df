"""`ibs` command line entry point (Typer).

Commands only translate arguments into domain requests, pick a runner and
hand over to the workflows in `ibs.core.services`. Any `IbsError` becomes a
red message and exit status 1.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.logging import RichHandler

from ibs import __version__
from ibs.adapters.process_runner import DryRunRunner, SubprocessRunner
from ibs.cli import doctor
from ibs.cli.ui_components import build_hooks, print_command, print_detail, print_error, print_success
from ibs.core.commands import Toolchain
from ibs.core.config import AppSettings
from ibs.core.domain.models import BuildRequest, DeployRequest, DeployTarget, ProjectSpec
from ibs.core.errors import IbsError
from ibs.core.interfaces.runner import CommandRunner
from ibs.core.services.scaffold import setup_project
from ibs.core.services.xcode_pipeline import build_project, deploy_project

app = typer.Typer(
    name="ibs",
    no_args_is_help=True,
    add_completion=False,
    help="iOS Build System - Command line tool for iOS project management",
)
app.add_typer(doctor.app, name="doctor")

logger = logging.getLogger(__name__)

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class CliState:
    verbose: bool = False
    dry_run: bool = False


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ibs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print external commands instead of running them."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Scaffold, build and deploy iOS apps with XcodeGen and xcodebuild."""

    configure_logging(verbose)
    ctx.obj = CliState(verbose=verbose, dry_run=dry_run)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _build_runner(state: CliState) -> CommandRunner:
    if state.dry_run:
        return DryRunRunner(echo=lambda invocation: print_command(_console, invocation))
    return SubprocessRunner()


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except IbsError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc


@app.command()
def setup(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="Name of the project"),
    team_id: str = typer.Argument(..., help="Apple Developer Team ID"),
) -> None:
    """Setup a new iOS project."""

    settings = AppSettings()
    with _handle_errors():
        project = ProjectSpec.create(
            name=project_name,
            team_id=team_id,
            bundle_id_prefix=settings.bundle_id_prefix,
            deployment_target=settings.deployment_target,
            xcode_version=settings.xcode_version,
        )

        _console.print(f"[green]Setting up[/green] iOS project: {project.name}")
        print_detail(_console, "Team ID", project.team_id)

        setup_project(
            project,
            runner=_build_runner(_state(ctx)),
            toolchain=Toolchain.from_settings(settings),
            hooks=build_hooks(_console),
        )

    print_success(_console, "Project setup completed successfully!")
    _console.print(
        f"\nTo get started:\n[blue]>[/blue] cd {project.name}\n[blue]>[/blue] open {project.name}.xcodeproj"
    )


@app.command()
def build(
    ctx: typer.Context,
    configuration: str = typer.Argument("Debug", help="Build configuration (Debug/Release)"),
    team_id: str | None = typer.Option(None, "--team-id", "-t", help="Development Team ID"),
    scheme: str | None = typer.Option(
        None, "--scheme", "-s", help="Project scheme name (defaults to project name)"
    ),
) -> None:
    """Build the iOS project."""

    settings = AppSettings()
    request = BuildRequest(
        configuration=configuration,
        team_id=team_id or settings.team_id,
        scheme=scheme,
    )
    with _handle_errors():
        build_project(
            request,
            runner=_build_runner(_state(ctx)),
            toolchain=Toolchain.from_settings(settings),
            logs_dir=settings.logs_dir,
            hooks=build_hooks(_console),
        )

    print_success(_console, "Build completed successfully!")


@app.command()
def deploy(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="Target to deploy to (device/simulator)"),
    configuration: str = typer.Argument("Debug", help="Build configuration (Debug/Release)"),
    simulator_id: str | None = typer.Option(
        None, "--simulator-id", help="Simulator ID (required for simulator deployment)"
    ),
    team_id: str | None = typer.Option(None, "--team-id", "-t", help="Development Team ID"),
    scheme: str | None = typer.Option(
        None, "--scheme", "-s", help="Project scheme name (defaults to project name)"
    ),
) -> None:
    """Deploy the iOS project to a device or simulator."""

    settings = AppSettings()
    with _handle_errors():
        request = DeployRequest(
            target=DeployTarget.parse(target),
            simulator_id=simulator_id,
            configuration=configuration,
            team_id=team_id or settings.team_id,
            scheme=scheme,
        )
        result = deploy_project(
            request,
            runner=_build_runner(_state(ctx)),
            toolchain=Toolchain.from_settings(settings),
            bundle_id_prefix=settings.bundle_id_prefix,
            logs_dir=settings.logs_dir,
            hooks=build_hooks(_console),
        )

    if request.target is DeployTarget.DEVICE:
        print_success(_console, "App installed successfully!")
        _console.print("You can now launch the app from your device.")
    print_success(_console, "Deployment completed successfully!")
    logger.debug("Deployed %s from %s", result.app_path, result.project.directory)


def run() -> None:
    app()
