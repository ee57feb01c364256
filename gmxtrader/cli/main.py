"""Main CLI entry point for gmxtrader.

This module provides the main click group and lazy loading
for heavy imports (web3, the agents SDK) to improve startup time.
"""

from pathlib import Path
from typing import Optional

import click

from gmxtrader.logging_utils import setup_logging


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: Optional[dict[str, str]] = None, **kwargs):
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

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
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
    "init": "gmxtrader.cli.setup",
    "tokens": "gmxtrader.cli.setup",
    # Prices
    "price": "gmxtrader.cli.market",
    "quote": "gmxtrader.cli.market",
    # Trading
    "swap": "gmxtrader.cli.swap",
    # Alerts
    "watch": "gmxtrader.cli.alerts",
    # AI Features
    "ask": "gmxtrader.cli.ask",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/gmxtrader/config.toml).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(package_name="gmxtrader")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """gmxtrader - AI-assisted swaps and price-drop alerts on GMX (Arbitrum).

    \b
    Quick Start:
      gmxtrader init                       # Write a template config
      gmxtrader price WETH                 # Current GMX Vault price
      gmxtrader quote WETH USDC 0.5        # Expected output and min-out
      gmxtrader watch -a WETH:0.001        # Alert on a 0.1% drop
      gmxtrader ask "buy 5 USDC of WETH"   # Natural-language command
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    setup_logging(verbose)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
