"""Journal commands for FX Journal CLI.

Handles opening and closing trades and listing the trade journal.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from fxjournal.analytics import compute_pnl, filter_by_window
from fxjournal.analytics.windows import WINDOWS
from fxjournal.cli.common import console, fail, format_money
from fxjournal.config import get_data_store
from fxjournal.errors import JournalError
from fxjournal.trades import (
    CLOSE_REASONS,
    RISK_REWARD_RATIOS,
    close_trade,
    find_trade,
    open_trade,
)


@click.command(name="open")
@click.option("--pair", "-p", type=str, default=None, help="Instrument, e.g. EUR/USD.")
@click.option(
    "--direction", "-d",
    type=click.Choice(["BUY", "SELL"], case_sensitive=False),
    required=True,
    help="Trade direction.",
)
@click.option("--entry", "entry_price", type=str, required=True, help="Entry price.")
@click.option("--lots", "lot_size", type=str, required=True, help="Lot size.")
@click.option("--sl", "stop_loss", type=str, default=None, help="Stop-loss price.")
@click.option("--tp", "take_profit", type=str, default=None, help="Take-profit price.")
@click.option("--notes", type=str, default="", help="Trade notes.")
@click.pass_context
def open_cmd(
    ctx: click.Context,
    pair: Optional[str],
    direction: str,
    entry_price: str,
    lot_size: str,
    stop_loss: Optional[str],
    take_profit: Optional[str],
    notes: str,
) -> None:
    """Record a new open trade.

    \b
    Examples:
      fxjournal open -p EUR/USD -d BUY --entry 1.1000 --lots 0.5
      fxjournal open -p USD/JPY -d SELL --entry 151.20 --lots 1 --sl 151.80
    """
    config = ctx.obj["config"]
    pair = pair or config["journal"]["default_pair"]

    try:
        trade = open_trade(
            pair=pair,
            direction=direction,
            entry_price=entry_price,
            lot_size=lot_size,
            stop_loss=stop_loss,
            take_profit=take_profit,
            notes=notes,
        )
    except JournalError as e:
        fail(str(e), "Invalid Trade")

    get_data_store().save_trade(trade)

    side_color = "green" if trade.direction == "BUY" else "red"
    console.print(Panel(
        f"[bold]{trade.pair}[/bold] [{side_color}]{trade.direction}[/{side_color}] "
        f"{trade.lot_size} lots @ {trade.entry_price}\n"
        f"SL: {trade.stop_loss or '-'} | TP: {trade.take_profit or '-'}\n\n"
        f"[dim]ID: {trade.id}[/dim]",
        title="[bold cyan]Trade Opened[/bold cyan]",
        border_style="cyan",
    ))


@click.command(name="close")
@click.argument("trade_id")
@click.option("--exit", "exit_price", type=str, required=True, help="Exit price.")
@click.option(
    "--reason", "close_reason",
    type=str,
    required=True,
    help=f"Close reason, e.g. {', '.join(CLOSE_REASONS[:3])}.",
)
@click.option(
    "--rr", "risk_reward_ratio",
    type=click.Choice(RISK_REWARD_RATIOS),
    required=True,
    help="Risk/reward of the trade.",
)
def close_cmd(
    trade_id: str, exit_price: str, close_reason: str, risk_reward_ratio: str
) -> None:
    """Close an open trade.

    TRADE_ID may be the full ID or a unique prefix.

    \b
    Examples:
      fxjournal close 3fa2 --exit 1.1050 --reason "Take Profit Hit" --rr 1:2
    """
    store = get_data_store()

    try:
        trade = find_trade(store.get_trades(), trade_id)
        closed = close_trade(trade, exit_price, close_reason, risk_reward_ratio)
    except JournalError as e:
        fail(str(e), "Cannot Close Trade")

    store.save_trade(closed)

    console.print(Panel(
        f"[bold]{closed.pair}[/bold] {closed.direction} closed @ {closed.exit_price}\n"
        f"Reason: {closed.close_reason} | R:R {closed.risk_reward_ratio}\n\n"
        f"P&L: {format_money(compute_pnl(closed))}",
        title="[bold cyan]Trade Closed[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option(
    "--window", "-w",
    type=click.Choice(WINDOWS),
    default=None,
    help="Limit to trades entered today, this week, this month, or all.",
)
@click.option(
    "--status",
    type=click.Choice(["OPEN", "CLOSED"], case_sensitive=False),
    default=None,
    help="Only show trades with this status.",
)
@click.pass_context
def trades(ctx: click.Context, window: Optional[str], status: Optional[str]) -> None:
    """Display the trade journal, most recent first.

    \b
    Examples:
      fxjournal trades              # All trades
      fxjournal trades -w today     # Entered today
      fxjournal trades --status OPEN
    """
    config = ctx.obj["config"]
    window = window or config["journal"]["list_window"]

    store = get_data_store()
    all_trades = store.get_trades(status=status.upper() if status else None)
    shown = filter_by_window(all_trades, window, policy="calendar")

    if not shown:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Entered", style="dim")
    table.add_column("Pair", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Lots", justify="right")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("Status", justify="center")
    table.add_column("P&L", justify="right")

    for trade in reversed(shown):
        side_color = "green" if trade.direction == "BUY" else "red"
        status_str = "[yellow]OPEN[/yellow]" if trade.status == "OPEN" else "[dim]CLOSED[/dim]"
        pnl_str = format_money(compute_pnl(trade)) if trade.status == "CLOSED" else "-"

        table.add_row(
            trade.id[:8],
            trade.entry_time.strftime("%Y-%m-%d %H:%M"),
            trade.pair,
            f"[{side_color}]{trade.direction}[/{side_color}]",
            f"{trade.lot_size:g}",
            f"{trade.entry_price:g}",
            f"{trade.exit_price:g}" if trade.exit_price is not None else "-",
            status_str,
            pnl_str,
        )

    console.print(table)
    console.print(f"\n[bold]Trades:[/bold] {len(shown)}")
