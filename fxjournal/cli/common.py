"""Shared console helpers for the CLI commands."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

console = Console()


def print_error(message: str, title: str = "Error") -> None:
    """Render an error panel."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def fail(message: str, title: str = "Error") -> None:
    """Render an error panel and exit with status 1."""
    print_error(message, title)
    raise SystemExit(1)


def format_money(value: Optional[float], symbol: str = "$") -> str:
    """Color a signed money value green/red."""
    if value is None:
        return "-"
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{symbol}{abs(value):,.2f}[/{color}]"


def currency_symbol(currency: Optional[str]) -> str:
    symbols = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
    if not currency:
        return "$"
    return symbols.get(currency.upper(), currency.upper() + " ")
