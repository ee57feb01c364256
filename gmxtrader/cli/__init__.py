"""CLI commands for gmxtrader.

This package provides the command-line interface for gmxtrader,
including price quotes, swaps, alert monitoring and natural-language
commands.
"""

from gmxtrader.cli.main import cli, main

__all__ = ["cli", "main"]
