"""Natural-language command parser.

Turns chat-style commands such as "trade! buy 0.77 USDC for WETH with 1%
slippage" or "alert! buy alert for WETH on a 0.1% drop" into validated
TradeIntent / AlertIntent objects. The language model only extracts the
fields; validation happens locally with pydantic.
"""

import json
import logging
import re
from typing import Literal, Optional

from pydantic import ValidationError

from gmxtrader.agents.base import create_agent, run_agent_async
from gmxtrader.errors import CommandParseError
from gmxtrader.models import AlertIntent, CommandIntent, TradeIntent

logger = logging.getLogger(__name__)

CommandType = Literal["trade", "alert"]


TRADE_PARSER_INSTRUCTIONS = """You are a JSON-only trading command parser for a crypto trading bot.
Return ONLY a JSON object (wrapped in a markdown code block with "json") with the following keys:
- commandType: the literal "trade"
- tokenIn: the token symbol to spend (e.g. "USDC", "WETH", "LINK")
- tokenOut: the token symbol to receive
- amountIn: a positive number representing the input amount (human-readable)
- slippage: an optional positive number representing the desired slippage (e.g., 0.01 for 1%)
Do not include any extra text outside the JSON block.

Example:
Input: "trade! buy $0.77 USDC for WETH with 1% slippage"
Output:
```json
{"commandType": "trade", "tokenIn": "USDC", "tokenOut": "WETH", "amountIn": 0.77, "slippage": 0.01}
```
"""

ALERT_PARSER_INSTRUCTIONS = """You are a JSON-only alert command parser for a crypto trading agent.
Return ONLY a JSON object (wrapped in a markdown code block with "json") with exactly these keys:
- commandType: the literal "alert"
- token: the token symbol to monitor (for example, "WETH")
- threshold: the drop threshold as a decimal (for example, 0.001 for 0.1%)
- customSlippage: an optional number for slippage tolerance
Do not include any extra text outside the JSON block.

Example:
Input: "alert! set up a buy alert for WETH if there's a 0.1% drop"
Output:
```json
{"commandType": "alert", "token": "WETH", "threshold": 0.001}
```
"""

_THINK_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)
_FENCED_JSON_PATTERN = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
_BARE_JSON_PATTERN = re.compile(r"\{.*\}", re.DOTALL)
_ALERT_PATTERN = re.compile(r"\balert\b", re.IGNORECASE)


def classify_command(text: str) -> CommandType:
    """Route a command to the alert or trade parser.

    Any command mentioning the word "alert" is an alert command.
    """
    return "alert" if _ALERT_PATTERN.search(text) else "trade"


def extract_json(content: str) -> dict:
    """Extract the JSON object from a model response.

    Reasoning blocks (``<think>...</think>``) are removed first. A fenced
    ```json block is preferred; otherwise the outermost ``{...}`` span is
    used.

    Raises:
        CommandParseError: If no JSON object can be found or decoded.
    """
    cleaned = _THINK_PATTERN.sub("", content).strip()

    fenced = _FENCED_JSON_PATTERN.search(cleaned)
    if fenced:
        json_str = fenced.group(1)
    else:
        bare = _BARE_JSON_PATTERN.search(cleaned)
        if not bare:
            raise CommandParseError("No valid JSON found in model response")
        json_str = bare.group(0)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise CommandParseError(f"Invalid JSON in model response: {e}") from e

    if not isinstance(data, dict):
        raise CommandParseError("Model response JSON is not an object")
    return data


def build_intent(command_type: CommandType, data: dict) -> CommandIntent:
    """Validate extracted JSON as a TradeIntent or AlertIntent.

    Raises:
        CommandParseError: If validation fails.
    """
    model = AlertIntent if command_type == "alert" else TradeIntent
    payload = {k: v for k, v in data.items() if k not in ("commandType", "command_type")}
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise CommandParseError(f"Invalid {command_type} command: {e}") from e


class CommandParser:
    """Parses natural-language commands with an LLM agent."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the parser.

        Args:
            model: Optional model override.
        """
        self._trade_agent = create_agent(
            name="Trade Command Parser",
            instructions=TRADE_PARSER_INSTRUCTIONS,
            model=model,
        )
        self._alert_agent = create_agent(
            name="Alert Command Parser",
            instructions=ALERT_PARSER_INSTRUCTIONS,
            model=model,
        )

    async def parse(self, text: str) -> CommandIntent:
        """Parse a command into a structured intent.

        Args:
            text: Natural-language command.

        Returns:
            TradeIntent or AlertIntent.

        Raises:
            CommandParseError: If the command cannot be understood.
        """
        text = text.strip()
        if not text:
            raise CommandParseError("Empty command")

        command_type = classify_command(text)
        agent = self._alert_agent if command_type == "alert" else self._trade_agent
        logger.info("Processing %s command: %s", command_type, text)

        try:
            content = await run_agent_async(agent, f"Parse this command into JSON: {text}")
        except Exception as e:
            raise CommandParseError(f"Command parser request failed: {e}") from e

        logger.debug("Raw parser response: %s", content)
        intent = build_intent(command_type, extract_json(content))
        logger.info("Parsed %s command: %s", command_type, intent.model_dump())
        return intent
