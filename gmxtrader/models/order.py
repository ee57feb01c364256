"""SwapOrder and SwapResult data models."""

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from gmxtrader.models.intent import TradeIntent


class SwapOrder(BaseModel):
    """Represents a swap to be executed."""

    token_in: str = Field(..., min_length=1, description="Token to spend")
    token_out: str = Field(..., min_length=1, description="Token to receive")
    amount_in: float = Field(..., gt=0, description="Human-readable input amount")
    slippage: float = Field(
        default=0.02, ge=0, lt=1, description="Slippage tolerance fraction"
    )

    model_config = {"frozen": True}

    @field_validator("token_in", "token_out")
    @classmethod
    def _upper_token(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def from_intent(cls, intent: TradeIntent) -> "SwapOrder":
        """Build an order from a parsed trade command."""
        return cls(
            token_in=intent.token_in,
            token_out=intent.token_out,
            amount_in=intent.amount_in,
            slippage=intent.slippage,
        )


class SwapResult(BaseModel):
    """Represents the result of a swap."""

    status: Literal["COMPLETE", "FAILED"] = Field(..., description="Swap status")
    token_in: str = Field(..., description="Token spent")
    token_out: str = Field(..., description="Token received")
    amount_in: float = Field(..., gt=0, description="Amount spent")
    expected_out: float = Field(..., ge=0, description="Estimated output amount")
    min_out: float = Field(..., ge=0, description="Minimum acceptable output")
    min_out_units: int = Field(..., ge=0, description="Minimum output in token units")
    tx_hash: Optional[str] = Field(default=None, description="Transaction hash")
    is_paper: bool = Field(default=False, description="Paper swap flag")
    message: str = Field(default="", description="Status message")

    model_config = {"frozen": True}
