"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK. Any OpenAI-compatible endpoint (for example
Groq) can be used by setting ``OPENAI_BASE_URL``.
"""

import logging
import os
from typing import Any, Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner

logger = logging.getLogger(__name__)


# Default model to use for agents
DEFAULT_MODEL = "gpt-4o"


def get_model(config: Optional[dict[str, Any]] = None) -> str:
    """Get the model to use for agents.

    Checks the OPENAI_MODEL environment variable, then ``[openai] model``
    in the config, then falls back to the default.
    """
    if os.environ.get("OPENAI_MODEL"):
        return os.environ["OPENAI_MODEL"]
    if config:
        model = config.get("openai", {}).get("model")
        if model:
            return model
    return DEFAULT_MODEL


def get_api_key(config: Optional[dict[str, Any]] = None) -> Optional[str]:
    """Get the OpenAI API key from the environment or the config."""
    if os.environ.get("OPENAI_API_KEY"):
        return os.environ["OPENAI_API_KEY"]
    if config:
        return config.get("openai", {}).get("api_key") or None
    return None


def create_agent(
    name: str,
    instructions: str,
    model: Optional[str] = None,
) -> Agent:
    """Create a tool-less AI agent.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        model: Optional model override. Uses default if not specified.

    Returns:
        Configured Agent instance.
    """
    return Agent(
        name=name,
        instructions=instructions,
        model=model or get_model(),
    )


async def run_agent_async(agent: Agent, message: str) -> str:
    """Run an agent asynchronously and return the final output as text."""
    logger.debug("Agent: %s | Model: %s", agent.name, agent.model)
    result = await Runner.run(agent, message)
    return str(result.final_output)
