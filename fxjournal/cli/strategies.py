"""Strategy commands for FX Journal CLI.

Handles strategy creation, listing, and backtest submission.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from fxjournal.cli.common import console, fail
from fxjournal.config import get_data_store
from fxjournal.db.store import DataStore
from fxjournal.errors import JournalError, RejectedError
from fxjournal.models import Strategy
from fxjournal.strategies import (
    create_strategy,
    progress,
    remaining_backtests,
    submit_backtest,
)


def _find_strategy(store: DataStore, strategy_id: str) -> Strategy:
    """Find a strategy by ID or unique ID prefix, exiting if none matches."""
    strategies = store.get_strategies()
    matches = [s for s in strategies if s.id == strategy_id]
    if not matches:
        matches = [s for s in strategies if s.id.startswith(strategy_id)]
    if len(matches) != 1:
        fail(f"No unique strategy matches '{strategy_id}'", "Strategy Not Found")
    return matches[0]


def _progress_text(strategy: Strategy) -> str:
    count, threshold = progress(strategy)
    if strategy.is_verified:
        return f"[green]{count}/{threshold} ✓ Verified[/green]"
    return f"{count}/{threshold}"


@click.group()
def strategy() -> None:
    """Manage trading strategies."""


@strategy.command(name="add")
@click.option("--name", type=str, required=True, help="Strategy name.")
@click.option("--entry-rules", type=str, required=True, help="Entry rules.")
@click.option("--exit-rules", type=str, required=True, help="Exit rules.")
@click.option("--description", type=str, default="", help="Short description.")
@click.option("--risk", "risk_per_trade", type=str, default="", help="Risk per trade.")
@click.option("--timeframe", type=str, default="", help="Chart timeframe, e.g. H1.")
def add_strategy(
    name: str,
    entry_rules: str,
    exit_rules: str,
    description: str,
    risk_per_trade: str,
    timeframe: str,
) -> None:
    """Create a new strategy.

    \b
    Examples:
      fxjournal strategy add --name "London Breakout" \\
          --entry-rules "Break of Asian range" --exit-rules "2R target"
    """
    try:
        new_strategy = create_strategy(
            name=name,
            entry_rules=entry_rules,
            exit_rules=exit_rules,
            description=description,
            risk_per_trade=risk_per_trade,
            timeframe=timeframe,
        )
    except JournalError as e:
        fail(str(e), "Invalid Strategy")

    get_data_store().save_strategy(new_strategy)
    console.print(
        f"[green]Strategy saved:[/green] {new_strategy.name} [dim]({new_strategy.id})[/dim]"
    )


@strategy.command(name="list")
def list_strategies() -> None:
    """List strategies with their backtest progress."""
    strategies = get_data_store().get_strategies()

    if not strategies:
        console.print(Panel(
            "[dim]No strategies found[/dim]",
            title="[bold]Strategies[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Strategies",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Timeframe")
    table.add_column("Risk")
    table.add_column("Backtests", justify="right")

    for item in strategies:
        table.add_row(
            item.id[:8],
            item.name,
            item.timeframe or "-",
            item.risk_per_trade or "-",
            _progress_text(item),
        )

    console.print(table)


@strategy.command(name="show")
@click.argument("strategy_id")
@click.option("--last", type=int, default=10, help="Number of recent backtests to show.")
def show_strategy(strategy_id: str, last: int) -> None:
    """Show a strategy's rules and recent backtests."""
    item = _find_strategy(get_data_store(), strategy_id)

    console.print(Panel(
        f"[bold]{item.name}[/bold]\n"
        f"{item.description}\n\n"
        f"[bold]Entry:[/bold] {item.entry_rules}\n"
        f"[bold]Exit:[/bold] {item.exit_rules}\n"
        f"[bold]Risk:[/bold] {item.risk_per_trade or '-'} | "
        f"[bold]Timeframe:[/bold] {item.timeframe or '-'}\n\n"
        f"Backtests: {_progress_text(item)}",
        title="[bold cyan]Strategy[/bold cyan]",
        border_style="cyan",
    ))

    if not item.backtest_results:
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Entry", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("Outcome")
    table.add_column("P&L %", justify="right")
    table.add_column("Notes", max_width=30)

    for result in item.backtest_results[-last:]:
        table.add_row(
            result.date.isoformat(),
            f"{result.entry_price:g}",
            f"{result.exit_price:g}",
            result.outcome or "-",
            f"{result.pnl:.2f}" if result.pnl is not None else "-",
            result.notes or "-",
        )

    console.print(table)


@click.command()
@click.argument("strategy_id")
@click.option("--entry", "entry_price", type=str, required=True, help="Entry price.")
@click.option("--exit", "exit_price", type=str, required=True, help="Exit price.")
@click.option("--date", "backtest_date", type=str, required=True, help="Setup date (YYYY-MM-DD).")
@click.option("--outcome", type=str, default="", help="Win or Loss.")
@click.option("--pnl", type=str, default=None, help="Result in percent.")
@click.option("--notes", type=str, default="", help="Notes.")
def backtest(
    strategy_id: str,
    entry_price: str,
    exit_price: str,
    backtest_date: str,
    outcome: str,
    pnl: Optional[str],
    notes: str,
) -> None:
    """Record a backtest for a strategy.

    A strategy is verified once it has 100 backtests; verified
    strategies accept no further backtests.

    \b
    Examples:
      fxjournal backtest 3fa2 --entry 1.1 --exit 1.105 --date 2024-03-01 --outcome Win
    """
    store = get_data_store()
    current = _find_strategy(store, strategy_id)

    try:
        updated = submit_backtest(
            current,
            {
                "entry_price": entry_price,
                "exit_price": exit_price,
                "date": backtest_date,
                "outcome": outcome,
                "pnl": pnl,
                "notes": notes,
            },
        )
    except RejectedError as e:
        fail(str(e), "Rejected")
    except JournalError as e:
        fail(str(e), "Invalid Backtest")

    store.save_strategy(updated)

    if updated.is_verified:
        console.print(Panel(
            f"[bold]{updated.name}[/bold] reached {updated.backtest_count} backtests.",
            title="[bold green]Strategy Verified ✓[/bold green]",
            border_style="green",
        ))
    else:
        console.print(
            f"[green]Backtest saved[/green] ({_progress_text(updated)}, "
            f"{remaining_backtests(updated)} to go)"
        )
