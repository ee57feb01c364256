"""Configuration for gmxtrader.

Holds the static token registry for Arbitrum, the GMX contract addresses,
and the loader for ``~/.config/gmxtrader/config.toml``. Environment
variables take precedence over values in the config file.
"""

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from gmxtrader.errors import UnknownTokenError


CONFIG_DIR = Path.home() / ".config" / "gmxtrader"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_RPC_URL = "https://arb1.arbitrum.io/rpc"
DEFAULT_VAULT_ADDRESS = "0x489ee077994B6658eAfA855C308275EAd8097C4A"
DEFAULT_ROUTER_ADDRESS = "0xaBBc5F99639c9B6bCb58544ddf04EFA6802F4064"

DEFAULT_SLIPPAGE = 0.02
DEFAULT_ALERT_INTERVAL_MS = 10000


class TokenConfig(BaseModel):
    """Static configuration for a supported token."""

    symbol: str = Field(..., min_length=1, description="Token symbol")
    address: str = Field(..., min_length=1, description="ERC20 contract address")
    decimals: int = Field(..., ge=0, le=36, description="ERC20 decimals")
    min_price: float = Field(..., gt=0, description="Lowest plausible USD price")
    max_price: float = Field(..., gt=0, description="Highest plausible USD price")

    model_config = {"frozen": True}


# Symbol -> (default address, decimals, min_price, max_price)
_TOKENS: dict[str, tuple[str, int, float, float]] = {
    "USDT": ("0xfd086bc7cd5c481dcc9c85ebe478a1c0b69fcbb9", 6, 0.5, 1.5),
    "USDC": ("0xff970a61a04b1ca14834a43f5de4533ebddb5cc8", 6, 0.5, 1.5),
    "DAI": ("0xda10009cbd5d07dd0cecc66161fc93d7c9000da1", 18, 0.5, 1.5),
    "WBTC": ("0x2f2a2543B76A4166549F7aaB2e75Bef0aefC5B0f", 8, 1000.0, 1000000.0),
    "LINK": ("0xf97f4df75117a78c1A5a0DBb814Af92458539FB4", 18, 0.1, 10000.0),
    "UNI": ("0xfa7F8980b0f1E64A2062791cc3b0871572f1F7f0", 18, 0.1, 10000.0),
    "WETH": ("0x82af49447d8a07e3bd95bd0d56f35241523fbab1", 18, 100.0, 100000.0),
    "ARB": ("0x912ce59144191c1204e64559fe8253a0e49e6548", 18, 0.01, 1000.0),
    "CRV": ("0x11cDb42B0EB46D95f990BeDD4695A6e3fA034978", 18, 0.01, 1000.0),
    "USDS": ("0x6491c05A82219b8D1479057361ff1654749b876b", 18, 0.5, 1.5),
    "GMX": ("0xfc5a1a6eb076aef2c3dc2b192745c52ba2a2f33a", 18, 0.1, 10000.0),
}


def _build_token_config() -> dict[str, TokenConfig]:
    """Build the token registry, applying ``<SYMBOL>_ADDRESS`` overrides."""
    return {
        symbol: TokenConfig(
            symbol=symbol,
            address=os.environ.get(f"{symbol}_ADDRESS", address),
            decimals=decimals,
            min_price=min_price,
            max_price=max_price,
        )
        for symbol, (address, decimals, min_price, max_price) in _TOKENS.items()
    }


TOKEN_CONFIG: dict[str, TokenConfig] = _build_token_config()


def supported_tokens() -> list[str]:
    """Return the sorted list of supported token symbols."""
    return sorted(TOKEN_CONFIG)


def get_token_config(symbol: str) -> TokenConfig:
    """Look up token configuration by symbol.

    Args:
        symbol: Token symbol, compared case-insensitively.

    Returns:
        TokenConfig for the symbol.

    Raises:
        UnknownTokenError: If the symbol is not configured.
    """
    token = TOKEN_CONFIG.get(symbol.strip().upper())
    if token is None:
        raise UnknownTokenError(symbol)
    return token


def load_config(path: Optional[Path] = None) -> dict[str, Any]:
    """Load the TOML configuration file.

    Args:
        path: Optional config path. Defaults to ``~/.config/gmxtrader/config.toml``.

    Returns:
        Config dict, empty if the file is missing or unreadable.
    """
    import toml

    config_path = path or CONFIG_PATH
    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except (OSError, toml.TomlDecodeError):
        return {}


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Args:
        path: Optional config path. Defaults to ``~/.config/gmxtrader/config.toml``.

    Returns:
        Path of the written file.
    """
    import toml

    config_path = path or CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "gmx": {
            "rpc_url": DEFAULT_RPC_URL,
            "vault_address": DEFAULT_VAULT_ADDRESS,
            "router_address": DEFAULT_ROUTER_ADDRESS,
            "private_key": "",  # Leave empty to use PRIVATE_KEY env var
        },
        "trading": {
            "mode": "paper",  # paper or live
            "price_source": "gmx",  # gmx or static (uses paper_prices)
            "default_slippage": DEFAULT_SLIPPAGE,
            "paper_prices": {"WETH": 2500.0, "USDC": 1.0, "WBTC": 60000.0},
        },
        "alerts": {
            "interval_ms": DEFAULT_ALERT_INTERVAL_MS,
        },
        "discord": {
            "webhook_url": "",  # Leave empty to print alerts to the console
        },
        "openai": {
            "api_key": "",  # Leave empty to use OPENAI_API_KEY env var
            "model": "gpt-4o",
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path


def get_setting(
    config: dict[str, Any],
    section: str,
    key: str,
    env_var: Optional[str] = None,
    default: Any = None,
) -> Any:
    """Resolve a setting from the environment, then the config, then a default.

    Empty strings in the config file count as unset.
    """
    if env_var and os.environ.get(env_var):
        return os.environ[env_var]
    value = config.get(section, {}).get(key)
    if value is None or value == "":
        return default
    return value


def get_rpc_url(config: dict[str, Any]) -> str:
    return get_setting(config, "gmx", "rpc_url", "GMX_RPC_URL", DEFAULT_RPC_URL)


def get_vault_address(config: dict[str, Any]) -> str:
    return get_setting(
        config, "gmx", "vault_address", "GMX_VAULT_ADDRESS", DEFAULT_VAULT_ADDRESS
    )


def get_router_address(config: dict[str, Any]) -> str:
    return get_setting(
        config, "gmx", "router_address", "GMX_ROUTER_ADDRESS", DEFAULT_ROUTER_ADDRESS
    )


def get_private_key(config: dict[str, Any]) -> Optional[str]:
    return get_setting(config, "gmx", "private_key", "PRIVATE_KEY")


def get_trading_mode(config: dict[str, Any]) -> str:
    return str(get_setting(config, "trading", "mode", default="paper")).lower()


def get_default_slippage(config: dict[str, Any]) -> float:
    return float(get_setting(config, "trading", "default_slippage", default=DEFAULT_SLIPPAGE))


def get_alert_interval_ms(config: dict[str, Any]) -> int:
    return int(get_setting(config, "alerts", "interval_ms", default=DEFAULT_ALERT_INTERVAL_MS))


def get_webhook_url(config: dict[str, Any]) -> Optional[str]:
    return get_setting(config, "discord", "webhook_url", "DISCORD_WEBHOOK_URL")
