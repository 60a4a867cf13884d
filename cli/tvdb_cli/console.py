from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape

from .formatting import format_cell

console = Console()


def print_json(data: Any) -> None:
    console.print_json(data=data)


def field(key: str, value: Any) -> None:
    """One ``key: value`` line of a record, lists shortened."""
    console.print(f"[bold]{escape(str(key))}[/]: {escape(format_cell(value))}")


def info(msg: str) -> None:
    console.print(f"[bold cyan]•[/] {escape(msg)}")


def ok(msg: str) -> None:
    console.print(f"[bold green]OK[/] {escape(msg)}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/] {escape(msg)}")


def err(msg: str) -> None:
    console.print(f"[bold red]ERR[/] {escape(msg)}")
