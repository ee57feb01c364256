"""AI agents for gmxtrader.

- CommandParser: natural-language trade and alert command parsing
"""

from gmxtrader.agents.base import create_agent, get_api_key, get_model, run_agent_async
from gmxtrader.agents.parser import CommandParser, build_intent, classify_command, extract_json

__all__ = [
    "CommandParser",
    "build_intent",
    "classify_command",
    "create_agent",
    "extract_json",
    "get_api_key",
    "get_model",
    "run_agent_async",
]
