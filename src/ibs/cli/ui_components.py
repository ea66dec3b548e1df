"""CLI UI components (Rich).

Why separate components:
- Keeps command functions free of styling details.
- The same step/warning formatting is shared by setup, build, deploy and
  the dry-run echo.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ibs.core.domain.models import CommandInvocation
from ibs.core.services.hooks import PipelineHooks


def print_banner(console: Console) -> None:
    title = Text("ibs", style="bold cyan")
    subtitle = Text("iOS Build System • XcodeGen • xcodebuild • simctl", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def print_step(console: Console, message: str) -> None:
    console.print(Text.assemble("\n", ("→", "blue"), " ", message))


def print_detail(console: Console, label: str, value: str) -> None:
    console.print(Text.assemble((f"{label}:", "yellow"), " ", value))


def print_warning(console: Console, message: str) -> None:
    console.print(Text.assemble(("Warning:", "yellow"), " ", message))


def print_success(console: Console, message: str) -> None:
    console.print(Text.assemble("\n", ("Success:", "green"), " ", message))


def print_error(console: Console, message: str) -> None:
    console.print(Text.assemble(("Error:", "bold red"), " ", message), soft_wrap=True)


def print_command(console: Console, invocation: CommandInvocation) -> None:
    """Echo a command the way a shell transcript would show it (dry-run)."""

    line = Text.assemble(("$ ", "dim"), invocation.display())
    if invocation.cwd is not None:
        line.append(f"  (in {invocation.cwd})", style="dim")
    console.print(line, soft_wrap=True)


def build_hooks(console: Console) -> PipelineHooks:
    """Wire workflow callbacks to the console."""

    return PipelineHooks(
        step=lambda message: print_step(console, message),
        detail=lambda label, value: print_detail(console, label, value),
        warning=lambda message: print_warning(console, message),
    )


def build_toolchain_table() -> Table:
    table = Table(title="ibs Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
