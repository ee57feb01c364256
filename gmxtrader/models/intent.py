"""Structured command intents produced by the command parser."""

from typing import Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, Field, field_validator

from gmxtrader.config import DEFAULT_SLIPPAGE


class TradeIntent(BaseModel):
    """A request to swap ``amount_in`` of ``token_in`` for ``token_out``."""

    command_type: Literal["trade"] = Field(
        default="trade",
        validation_alias=AliasChoices("commandType", "command_type"),
    )
    token_in: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("tokenIn", "token_in")
    )
    token_out: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("tokenOut", "token_out")
    )
    amount_in: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("amountIn", "amount_in", "amount"),
        description="Human-readable input amount",
    )
    slippage: float = Field(
        default=DEFAULT_SLIPPAGE, ge=0, lt=1, description="Slippage tolerance fraction"
    )

    model_config = {"frozen": True}

    @field_validator("token_in", "token_out")
    @classmethod
    def _upper_token(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("slippage", mode="before")
    @classmethod
    def _default_slippage(cls, value):
        return DEFAULT_SLIPPAGE if value is None else value


class AlertIntent(BaseModel):
    """A request to watch ``token`` for a drop of ``threshold``."""

    command_type: Literal["alert"] = Field(
        default="alert",
        validation_alias=AliasChoices("commandType", "command_type"),
    )
    token: str = Field(..., min_length=1)
    threshold: float = Field(..., gt=0, description="Drop fraction (0.001 = 0.1%)")
    custom_slippage: Optional[float] = Field(
        default=None,
        ge=0,
        lt=1,
        validation_alias=AliasChoices("customSlippage", "custom_slippage"),
    )

    model_config = {"frozen": True}

    @field_validator("token")
    @classmethod
    def _upper_token(cls, value: str) -> str:
        return value.strip().upper()


CommandIntent = Union[TradeIntent, AlertIntent]
