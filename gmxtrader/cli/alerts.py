"""Alert monitoring commands for gmxtrader CLI.

Alerts live in memory for the life of the process: ``watch`` registers
them, captures each baseline price, then sweeps on a fixed interval until
interrupted.
"""

import asyncio
import getpass
from typing import Any, Optional

import click
from rich.table import Table

from gmxtrader.alerts import AlertMonitor, AlertRegistry
from gmxtrader.cli.common import console, fail, get_config
from gmxtrader.config import get_alert_interval_ms
from gmxtrader.errors import GmxTraderError
from gmxtrader.models import AlertIntent
from gmxtrader.services import build_notifier, build_price_source


def parse_alert_spec(spec: str) -> AlertIntent:
    """Parse a ``TOKEN:THRESHOLD`` alert spec.

    The threshold is a fraction (``0.05``) or a percentage (``5%``).

    Raises:
        click.BadParameter: If the spec is malformed.
    """
    token, sep, raw_threshold = spec.partition(":")
    if not sep or not token.strip() or not raw_threshold.strip():
        raise click.BadParameter(f"Expected TOKEN:THRESHOLD, got '{spec}'")

    raw_threshold = raw_threshold.strip()
    try:
        if raw_threshold.endswith("%"):
            threshold = float(raw_threshold[:-1]) / 100
        else:
            threshold = float(raw_threshold)
    except ValueError:
        raise click.BadParameter(f"Invalid threshold in '{spec}'") from None

    if threshold <= 0:
        raise click.BadParameter(f"Threshold must be positive in '{spec}'")

    return AlertIntent(token=token, threshold=threshold)


def render_alerts(registry: AlertRegistry) -> Table:
    """Render registered alerts as a rich table."""
    table = Table(title="Active Alerts", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", width=6)
    table.add_column("Token", style="bold")
    table.add_column("Drop", justify="right")
    table.add_column("Baseline (USD)", justify="right")
    table.add_column("Owner", style="dim")
    table.add_column("Status", justify="center")

    for alert in registry.alerts:
        status = "[yellow]✓ Triggered[/yellow]" if alert.triggered else "[green]●[/green]"
        table.add_row(
            str(alert.id),
            alert.token,
            f"{alert.threshold * 100:.3f}%",
            f"${alert.baseline_price:,.4f}",
            alert.owner_id,
            status,
        )
    return table


async def register_alerts(
    registry: AlertRegistry,
    intents: list[AlertIntent],
    owner_id: str,
) -> int:
    """Register each intent, reporting failures without stopping.

    Returns:
        Number of alerts registered.
    """
    registered = 0
    for intent in intents:
        try:
            alert = await registry.register_intent(intent, owner_id)
        except GmxTraderError as e:
            console.print(f"[red]✗ Could not register alert for {intent.token}: {e}[/red]")
            continue
        registered += 1
        console.print(
            f"[green]✓ Alert registered for {alert.token} at "
            f"{alert.threshold * 100:.3f}% drop (baseline ${alert.baseline_price:,.4f})[/green]"
        )
    return registered


async def run_watch(
    config: dict[str, Any],
    intents: list[AlertIntent],
    owner_id: str,
    interval_ms: Optional[int] = None,
    once: bool = False,
) -> AlertRegistry:
    """Register alerts and monitor them.

    With ``once`` a single sweep runs and the function returns; otherwise
    it monitors until cancelled.

    Raises:
        GmxTraderError: If no alert could be registered or the sweep
            interval is not positive.
    """
    period = interval_ms if interval_ms is not None else get_alert_interval_ms(config)
    if period <= 0:
        raise GmxTraderError(f"Sweep interval must be positive, got {period} ms")

    registry = AlertRegistry(build_price_source(config), build_notifier(config))

    if not await register_alerts(registry, intents, owner_id):
        raise GmxTraderError("No alerts could be registered")

    console.print(render_alerts(registry))

    if once:
        await registry.sweep()
        return registry

    monitor = AlertMonitor(registry)
    console.print(f"[dim]Checking every {period / 1000:g}s. Press Ctrl+C to stop.[/dim]")
    try:
        await monitor.start(period)
    finally:
        await monitor.stop()
    return registry


@click.command("watch")
@click.option(
    "--alert", "-a", "alert_specs",
    multiple=True,
    required=True,
    help="Alert as TOKEN:THRESHOLD, e.g. WETH:0.001 or LINK:5%. Repeatable.",
)
@click.option("--owner", default=None, help="Owner ID to address notifications to.")
@click.option("--interval", "interval_ms", type=int, default=None, help="Sweep interval in ms.")
@click.option("--once", is_flag=True, help="Run a single sweep and exit.")
@click.pass_context
def watch(
    ctx: click.Context,
    alert_specs: tuple[str, ...],
    owner: Optional[str],
    interval_ms: Optional[int],
    once: bool,
) -> None:
    """Watch tokens for price drops and signal a BUY.

    Each alert records the current price as its baseline and fires once
    when the price falls by THRESHOLD or more. It re-arms when the price
    recovers above the threshold.

    \b
    Examples:
      gmxtrader watch -a WETH:0.001
      gmxtrader watch -a WETH:1% -a LINK:0.05 --interval 30000
    """
    intents = [parse_alert_spec(spec) for spec in alert_specs]
    owner_id = owner or getpass.getuser()

    try:
        asyncio.run(run_watch(get_config(ctx), intents, owner_id, interval_ms, once))
    except KeyboardInterrupt:
        console.print("\n[dim]Monitoring stopped.[/dim]")
    except (GmxTraderError, ValueError) as e:
        fail("Failed to start monitoring", e)
