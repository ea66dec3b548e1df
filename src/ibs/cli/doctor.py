"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil

import typer
from rich.console import Console

from ibs.cli.ui_components import build_toolchain_table, print_banner
from ibs.core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Toolchain diagnostics and configuration checks.")

_console = Console()


def check_tool(program: str) -> tuple[bool, str]:
    """Resolve `program` on PATH (or as a path) without running it."""

    resolved = shutil.which(program)
    if resolved is None:
        return False, f"{program} not found on PATH"
    return True, resolved


@app.command()
def run() -> None:
    """Check that every external tool resolves and show the effective config."""

    settings = AppSettings()
    print_banner(_console)

    table = build_toolchain_table()

    missing: list[str] = []
    for label, program in settings.toolchain().items():
        ok, detail = check_tool(program)
        table.add_row(label, "OK" if ok else "MISSING", detail)
        if not ok:
            missing.append(label)

    # Config
    if settings.team_id:
        table.add_row("Team ID", "OK", settings.team_id)
    else:
        table.add_row("Team ID", "OPTIONAL", "No default -> pass --team-id to build/deploy")
    table.add_row("Bundle prefix", "OK", settings.bundle_id_prefix)
    table.add_row("Deployment target", "OK", f"iOS {settings.deployment_target}")
    table.add_row("Build dir", "OK", settings.build_dir)

    _console.print(table)

    if missing:
        _console.print(
            f"\n[red]Missing tools:[/red] {', '.join(missing)}. "
            "Install Xcode command line tools, XcodeGen (`brew install xcodegen`) "
            "and ios-deploy (`brew install ios-deploy`)."
        )
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive defaults setup (stored in the user config .env)."""

    settings = AppSettings()

    team_id = typer.prompt(
        "Default Apple Developer Team ID",
        default=settings.team_id or "",
        show_default=True,
    ).strip()
    prefix = typer.prompt(
        "Bundle identifier prefix",
        default=settings.bundle_id_prefix,
        show_default=True,
    ).strip()

    if not prefix:
        raise typer.BadParameter("bundle identifier prefix is required")

    env_path = write_user_env_vars(
        {
            "IBS_TEAM_ID": team_id or None,
            "IBS_BUNDLE_ID_PREFIX": prefix,
        },
        env_path=get_user_env_file(),
    )

    _console.print(f"[green]Saved defaults to:[/green] {env_path}")
