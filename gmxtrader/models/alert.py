"""Alert data model."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class Alert(BaseModel):
    """Represents a registered price-drop alert."""

    id: int = Field(..., ge=1, description="Registry-assigned alert ID")
    token: str = Field(..., min_length=1, description="Token symbol to monitor")
    threshold: float = Field(
        ..., gt=0, description="Drop fraction that triggers the alert (e.g., 0.05)"
    )
    custom_slippage: Optional[float] = Field(
        default=None, ge=0, lt=1, description="Slippage override for follow-up trades"
    )
    owner_id: str = Field(..., description="ID of the user who set the alert")
    baseline_price: float = Field(
        ..., gt=0, description="USD price captured at registration"
    )
    triggered: bool = Field(default=False, description="Whether alert has fired")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Alert creation timestamp"
    )

    model_config = {"frozen": True}

    @field_validator("token")
    @classmethod
    def _upper_token(cls, value: str) -> str:
        return value.strip().upper()

    def drop_from(self, current_price: float) -> float:
        """Fractional drop of ``current_price`` below the baseline.

        Negative when the price has risen.
        """
        return (self.baseline_price - current_price) / self.baseline_price
