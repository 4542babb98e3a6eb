"""Rich console helpers for CLI status messages.

Status messages go to stderr so stdout carries only the report.
"""

from rich.console import Console

console = Console(stderr=True)


def print_error(message: str) -> None:
    console.print(f"[red]✗ Error:[/red] {message}")


def print_info(message: str) -> None:
    console.print(f"[blue]ℹ[/blue] {message}")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")
