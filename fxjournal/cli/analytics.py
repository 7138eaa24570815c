"""Analytics commands for FX Journal CLI.

Handles the performance summary, equity curve and per-pair breakdown.
All three use rolling recency windows.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from fxjournal.analytics import aggregate, equity_curve, filter_by_window, pair_performance
from fxjournal.analytics.windows import WINDOWS
from fxjournal.cli.common import console, format_money
from fxjournal.config import get_data_store

WINDOW_OPTION = click.option(
    "--window", "-w",
    type=click.Choice(WINDOWS),
    default=None,
    help="Recency window (rolling days). Defaults to the configured chart window.",
)


def _windowed_trades(ctx: click.Context, window: Optional[str]):
    window = window or ctx.obj["config"]["journal"]["chart_window"]
    trades = get_data_store().get_trades()
    return window, filter_by_window(trades, window, policy="rolling")


@click.command()
@WINDOW_OPTION
@click.pass_context
def stats(ctx: click.Context, window: Optional[str]) -> None:
    """Display performance statistics for closed trades.

    Shows win rate, profit factor, best and worst trades, and
    the longest winning and losing streaks.

    \b
    Examples:
      fxjournal stats            # Configured window
      fxjournal stats -w all     # Whole history
    """
    window, trades = _windowed_trades(ctx, window)
    summary = aggregate(trades).rounded()

    if summary.total_trades == 0:
        console.print(Panel(
            f"[dim]No closed trades ({window})[/dim]",
            title="[bold]Performance[/bold]",
            border_style="dim",
        ))
        return

    pf_color = "green" if summary.profit_factor >= 1 else "red"
    text = (
        f"[bold]Performance Summary[/bold] ({window})\n\n"
        f"Total Trades:   {summary.total_trades}\n"
        f"Win Rate:       {summary.win_rate:.2f}% "
        f"({summary.winning_trades}W / {summary.losing_trades}L)\n"
        f"Profit Factor:  [{pf_color}]{summary.profit_factor:.2f}[/{pf_color}]\n"
        f"Avg P&L:        {format_money(summary.average_profit_loss)}\n"
        f"{'─' * 30}\n"
        f"Total Profit:   [green]${summary.total_profit:,.2f}[/green]\n"
        f"Total Loss:     [red]${summary.total_loss:,.2f}[/red]\n"
        f"Best Trade:     {format_money(summary.best_trade)}\n"
        f"Worst Trade:    {format_money(summary.worst_trade)}\n\n"
        f"[dim]Max Consecutive Wins: {summary.consecutive_wins} | "
        f"Max Consecutive Losses: {summary.consecutive_losses}[/dim]"
    )
    if summary.unpriced_trades:
        text += f"\n[yellow]Skipped {summary.unpriced_trades} trade(s) with unreadable prices[/yellow]"

    console.print(Panel(
        text,
        title="[bold cyan]Stats[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@WINDOW_OPTION
@click.pass_context
def equity(ctx: click.Context, window: Optional[str]) -> None:
    """Display the cumulative P&L curve by exit date.

    \b
    Examples:
      fxjournal equity -w month
    """
    window, trades = _windowed_trades(ctx, window)
    points = equity_curve(trades)

    table = Table(
        title=f"Equity Curve ({window})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Cumulative P&L", justify="right")

    for point in points:
        table.add_row(point.label or "-", format_money(round(point.value, 2)))

    console.print(table)


@click.command()
@WINDOW_OPTION
@click.pass_context
def pairs(ctx: click.Context, window: Optional[str]) -> None:
    """Display P&L grouped by currency pair.

    \b
    Examples:
      fxjournal pairs -w all
    """
    window, trades = _windowed_trades(ctx, window)
    entries = pair_performance(trades)

    table = Table(
        title=f"Pair Performance ({window})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Pair", style="bold")
    table.add_column("P&L", justify="right")

    for entry in entries:
        if not entry.has_data:
            table.add_row(f"[dim]{entry.pair}[/dim]", "-")
            continue
        table.add_row(entry.pair, format_money(round(entry.pnl, 2)))

    console.print(table)
