"""Main CLI entry point for FX Journal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import copy

import click
from rich.markup import escape

from fxjournal.cli.common import fail
from fxjournal.config import (
    DEFAULT_CONFIG,
    configure_logging,
    get_config_path,
    load_config,
    validate_config,
)


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when the command is invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "fxjournal.cli.init",
    # Journal
    "open": "fxjournal.cli.trades",
    "close": "fxjournal.cli.trades",
    "trades": "fxjournal.cli.trades",
    # Analytics
    "stats": "fxjournal.cli.analytics",
    "equity": "fxjournal.cli.analytics",
    "pairs": "fxjournal.cli.analytics",
    # Risk
    "risk": "fxjournal.cli.risk",
    "account": "fxjournal.cli.account",
    # Strategies
    "strategy": "fxjournal.cli.strategies",
    "backtest": "fxjournal.cli.strategies",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="fxjournal")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """FX Journal - forex trading journal with analytics and risk sizing.

    Record trades and strategies, review performance statistics,
    and size positions against your account balance.

    \b
    Quick Start:
      fxjournal init                                   # Create a config file
      fxjournal account set --number 123 --broker X --balance 10000
      fxjournal open --pair EUR/USD -d BUY --entry 1.1 --lots 0.5
      fxjournal stats --window month                   # Performance summary
    """
    ctx.ensure_object(dict)
    config = load_config()
    problems = validate_config(config)
    if problems and ctx.invoked_subcommand == "init":
        # init --force rewrites the file, so it runs on the defaults
        config = copy.deepcopy(DEFAULT_CONFIG)
    elif problems:
        fail(
            "Invalid configuration values:\n\n"
            + "\n".join(f"  • {escape(problem)}" for problem in problems)
            + f"\n\nEdit {escape(str(get_config_path()))} to fix these values.",
            "Configuration Error",
        )
    level = "DEBUG" if verbose else config["logging"]["level"]
    configure_logging(level)
    ctx.obj["config"] = config


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
