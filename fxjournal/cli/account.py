"""Account commands for FX Journal CLI."""

from typing import Optional

import click
from rich.panel import Panel

from fxjournal.accounts import update_account
from fxjournal.cli.common import console, currency_symbol, fail
from fxjournal.config import get_data_store
from fxjournal.errors import ValidationError


@click.group()
def account() -> None:
    """View or update trading account details."""


@account.command(name="set")
@click.option("--number", "account_number", type=str, default=None, help="Account number.")
@click.option("--broker", type=str, default=None, help="Broker name.")
@click.option("--balance", type=str, default=None, help="Account balance.")
@click.option("--currency", type=str, default=None, help="Account currency (e.g. USD).")
@click.option("--leverage", type=str, default=None, help="Leverage, e.g. 1:100.")
@click.option("--equity", type=str, default=None, help="Account equity.")
@click.option("--margin-level", type=str, default=None, help="Margin level percent.")
@click.option("--pl", "profit_loss", type=str, default=None, help="Floating profit/loss.")
def set_account(
    account_number: Optional[str],
    broker: Optional[str],
    balance: Optional[str],
    currency: Optional[str],
    leverage: Optional[str],
    equity: Optional[str],
    margin_level: Optional[str],
    profit_loss: Optional[str],
) -> None:
    """Save account details. Unspecified fields keep their value.

    \b
    Examples:
      fxjournal account set --number 123456 --broker IC --balance 10000
      fxjournal account set --balance 10250.50
    """
    store = get_data_store()

    try:
        updated = update_account(
            store.get_account(),
            account_number=account_number,
            broker=broker,
            balance=balance,
            currency=currency.upper() if currency else None,
            leverage=leverage,
            equity=equity,
            margin_level=margin_level,
            profit_loss=profit_loss,
        )
    except ValidationError as e:
        fail(str(e), "Validation Error")

    store.save_account(updated)
    console.print("[green]Account details saved[/green]")


@account.command(name="show")
def show_account() -> None:
    """Display saved account details."""
    details = get_data_store().get_account()

    if details is None:
        console.print(Panel(
            "[dim]No account details saved[/dim]\n\n"
            "Run [cyan]fxjournal account set[/cyan] to add them.",
            title="[bold]Account[/bold]",
            border_style="dim",
        ))
        return

    symbol = currency_symbol(details.currency)

    def money(value: Optional[float]) -> str:
        return f"{symbol}{value:,.2f}" if value is not None else "-"

    console.print(Panel(
        f"[bold]{details.broker}[/bold] #{details.account_number}\n\n"
        f"Balance:      {money(details.balance)}\n"
        f"Equity:       {money(details.equity)}\n"
        f"P&L:          {money(details.profit_loss)}\n"
        f"Leverage:     {details.leverage or '-'}\n"
        f"Margin Level: {f'{details.margin_level:.2f}%' if details.margin_level is not None else '-'}\n"
        f"Currency:     {details.currency}",
        title="[bold cyan]Account[/bold cyan]",
        border_style="cyan",
    ))
