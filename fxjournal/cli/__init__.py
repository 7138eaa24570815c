"""CLI commands for FX Journal.

This package provides the command-line interface for recording trades
and strategies, reviewing analytics, and sizing positions.
"""

from fxjournal.cli.main import cli, main

__all__ = ["cli", "main"]
