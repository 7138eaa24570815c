"""Setup command for FX Journal CLI."""

import click
from rich.panel import Panel

from fxjournal.cli.common import console
from fxjournal.config import get_config_path, get_data_store, write_template_config


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config.")
def init(force: bool) -> None:
    """Create the config file and the journal database.

    \b
    Examples:
      fxjournal init
      fxjournal init --force
    """
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists:[/yellow] {config_path}")
    else:
        write_template_config(config_path)
        console.print(f"[green]Wrote config:[/green] {config_path}")

    store = get_data_store()
    stats = store.get_stats()

    console.print(Panel(
        f"Database: {store.db_path}\n"
        f"Trades: {stats['trades']} | Strategies: {stats['strategies']}",
        title="[bold cyan]FX Journal[/bold cyan]",
        border_style="cyan",
    ))
