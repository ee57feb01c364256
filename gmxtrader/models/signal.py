"""Signal data model."""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field


class Signal(BaseModel):
    """A buy signal emitted when an alert crosses its threshold."""

    token: str = Field(..., min_length=1, description="Token symbol")
    current_price: float = Field(..., description="Price at the time of the sweep")
    average_price: float = Field(..., description="Baseline price of the alert")
    percentage_drop: float = Field(..., description="Drop fraction from the baseline")
    suggested_action: Literal["BUY"] = Field(default="BUY", description="Suggested action")
    timestamp: datetime = Field(default_factory=datetime.now, description="Emission time")
    owner_id: Optional[str] = Field(default=None, description="User to address")

    model_config = {"frozen": True}
