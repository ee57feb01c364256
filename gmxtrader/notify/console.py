"""Console notifier using rich."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

from gmxtrader.models import Signal
from gmxtrader.notify.base import BaseNotifier


class ConsoleNotifier(BaseNotifier):
    """Prints signals to the terminal as a rich panel."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    async def send(self, signal: Signal) -> None:
        owner = f"\nOwner:     {signal.owner_id}" if signal.owner_id else ""
        self._console.print(Panel(
            f"[bold green]Buy Signal Detected[/bold green]\n\n"
            f"Token:     {signal.token}\n"
            f"Current:   ${signal.current_price:,.2f}\n"
            f"Baseline:  ${signal.average_price:,.2f}\n"
            f"Drop:      [red]{signal.percentage_drop * 100:.2f}%[/red]\n"
            f"Action:    {signal.suggested_action}\n"
            f"Time:      {signal.timestamp.strftime('%Y-%m-%d %H:%M:%S')}"
            f"{owner}",
            title="[bold]🚨 Alert[/bold]",
            border_style="green",
        ))
