"""Rich console output for the rolerelay CLI."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rolerelay.domain.models import (
    ChainResult,
    ConversationTurn,
    HaltReason,
    Message,
    Role,
    Usage,
)

# Shared console instances
console = Console()
error_console = Console(stderr=True)

ROLE_STYLES = {
    Role.USER: "white",
    Role.MANAGER: "magenta",
    Role.ANALYST: "cyan",
    Role.ARCHITECT: "blue",
    Role.TESTER: "yellow",
    Role.IMPLEMENTER: "green",
    Role.REVIEWER: "red",
    Role.DEPLOYER: "bright_blue",
}


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_message(message: Message) -> None:
    """Print one log entry with its events and attached files."""
    title = Text(message.role.value, style="bold")
    if message.phase is not None:
        title.append(f" -> {message.phase.value}", style="dim")

    body = Text(message.content)
    for event in message.events:
        body.append(f"\n{event}", style="italic cyan")
    if message.artifact is not None:
        body.append(
            f"\n\n{message.artifact.kind.value}: {message.artifact.title}",
            style="bold",
        )
        for path in message.artifact.files:
            body.append(f"\n  {path}", style="dim")

    subtitle = None
    if message.role is not Role.USER:
        subtitle = (
            f"{message.model} | {message.usage.total_tokens} tokens"
            f" | {message.time_taken_seconds:.1f}s"
        )
    console.print(
        Panel(
            body,
            title=title,
            subtitle=subtitle,
            border_style=ROLE_STYLES.get(message.role, "white"),
        )
    )


def print_chain_result(result: ChainResult) -> None:
    """Print the messages a run appended and why it stopped."""
    for message in result.appended:
        print_message(message)

    if result.halt_reason is HaltReason.TERMINAL:
        console.print(
            Panel(
                f"Chain complete after {len(result.appended)} step(s)",
                title="Done",
                border_style="green",
            )
        )
        return

    content = Text(f"Stopped: {result.halt_reason.value}", style="bold red")
    if result.error:
        content.append(f"\n{result.error}", style="dim")
    console.print(Panel(content, title="Halted", border_style="red"))


def print_context(blocks: Sequence[ConversationTurn]) -> None:
    """Print assembled prompt blocks."""
    if not blocks:
        console.print("[dim]Context is empty.[/dim]")
        return
    for i, block in enumerate(blocks, 1):
        console.print(
            Panel(Text(block.content), title=f"{i}. {block.role}", expand=True)
        )


def print_usage(usage: Mapping[Role, Usage], seconds: Mapping[Role, float]) -> None:
    """Print per-role token and time totals."""
    table = Table(title="Usage")
    table.add_column("Role", style="cyan")
    table.add_column("Input", justify="right")
    table.add_column("Output", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Time (s)", justify="right")

    total = Usage()
    total_seconds = 0.0
    for role, role_usage in usage.items():
        role_seconds = seconds.get(role, 0.0)
        table.add_row(
            role.value,
            str(role_usage.input_tokens),
            str(role_usage.output_tokens),
            str(role_usage.total_tokens),
            f"{role_seconds:.1f}",
        )
        total = total + role_usage
        total_seconds += role_seconds

    table.add_section()
    table.add_row(
        "total",
        str(total.input_tokens),
        str(total.output_tokens),
        str(total.total_tokens),
        f"{total_seconds:.1f}",
        style="bold",
    )
    console.print(table)


def print_sessions(session_ids: Sequence[str]) -> None:
    if not session_ids:
        console.print("[dim]No sessions stored.[/dim]")
        return
    for session_id in session_ids:
        console.print(session_id)
