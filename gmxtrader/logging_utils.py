"""Logging setup for the gmxtrader CLI."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Route log records through rich.

    Args:
        verbose: Log at DEBUG instead of INFO.
        console: Optional console to render to (stderr by default).
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # Third-party clients are chatty at DEBUG
    for name in ("web3", "urllib3", "aiohttp", "openai", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)
