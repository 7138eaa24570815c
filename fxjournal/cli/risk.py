"""Risk calculator command for FX Journal CLI."""

from typing import Optional

import click
from rich.panel import Panel

from fxjournal.cli.common import console, currency_symbol, fail
from fxjournal.config import get_data_store
from fxjournal.errors import DegenerateInputError, ValidationError
from fxjournal.models import AccountSnapshot, RiskInputs
from fxjournal.risk import compute_risk, reference_pip_value


@click.command()
@click.option("--risk", "-r", "risk_percentage", type=str, default=None, help="Percent of balance to risk.")
@click.option("--entry", "entry_price", type=str, required=True, help="Entry price.")
@click.option("--sl", "stop_loss", type=str, required=True, help="Stop-loss price.")
@click.option("--tp", "take_profit", type=str, required=True, help="Take-profit price.")
@click.option("--pair", "-p", "instrument", type=str, default="EURUSD", help="Instrument code.")
@click.option("--balance", type=str, default=None, help="Override the saved account balance.")
@click.pass_context
def risk(
    ctx: click.Context,
    risk_percentage: Optional[str],
    entry_price: str,
    stop_loss: str,
    take_profit: str,
    instrument: str,
    balance: Optional[str],
) -> None:
    """Calculate position size and risk/reward.

    Sizes the position so that hitting the stop-loss loses exactly
    the risked share of the account balance.

    \b
    Examples:
      fxjournal risk -r 2 --entry 1.1000 --sl 1.0950 --tp 1.1100
      fxjournal risk --entry 151.20 --sl 151.70 --tp 150.20 -p USDJPY
    """
    config = ctx.obj["config"]
    if risk_percentage is None:
        risk_percentage = str(config["risk"]["default_risk_percentage"])

    account = get_data_store().get_account() or AccountSnapshot()
    if balance is not None:
        account = account.model_copy(
            update={"balance": AccountSnapshot(balance=balance).balance}
        )

    inputs = RiskInputs(
        risk_percentage=risk_percentage,
        entry_price=entry_price,
        stop_loss=stop_loss,
        take_profit=take_profit,
        instrument=instrument,
    )

    try:
        result = compute_risk(account, inputs).rounded()
    except ValidationError as e:
        fail(
            f"{e}\n\nSet a balance with [cyan]fxjournal account set --balance ...[/cyan] "
            "or pass --balance.",
            "Invalid Input",
        )
    except DegenerateInputError as e:
        fail(str(e), "Cannot Size Position")

    symbol = currency_symbol(account.currency)
    rr_color = "green" if result.risk_reward_ratio >= 1 else "yellow"

    text = (
        f"[bold]Position Sizing[/bold] ({instrument.upper()}, "
        f"pip value {reference_pip_value(instrument):.2f}/lot)\n\n"
        f"Position Size:    [bold]{result.position_size:.2f} lots[/bold]\n"
        f"Pip Value:        {symbol}{result.pip_value:,.2f}\n"
        f"Stop Distance:    {result.pip_distance_to_stop:.1f} pips\n"
        f"Target Distance:  {result.pip_distance_to_target:.1f} pips\n"
        f"{'─' * 30}\n"
        f"Potential Loss:   [red]{symbol}{result.potential_loss:,.2f}[/red]\n"
        f"Potential Profit: [green]{symbol}{result.potential_profit:,.2f}[/green]\n"
        f"Risk/Reward:      [{rr_color}]1:{result.risk_reward_ratio:.2f}[/{rr_color}]"
    )

    console.print(Panel(
        text,
        title="[bold cyan]Risk Calculator[/bold cyan]",
        border_style="cyan",
    ))
