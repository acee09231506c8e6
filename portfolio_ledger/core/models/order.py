# portfolio_ledger/core/models/order.py

from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, Field, condecimal, ConfigDict, field_validator

from portfolio_ledger.core.models.lot import normalize_ticker


class Order(BaseModel):
    """
    A single buy or sell instruction submitted for batch processing.
    The computed fields are filled in by the order executor.
    """
    order_id: str = Field(..., description="Unique identifier for the order")
    side: str = Field(..., description="Order side (BUY or SELL)")
    ticker: str = Field(..., description="Ticker symbol; normalized on input")
    description: Optional[str] = Field(None, description="Security description, used for BUY orders")
    shares: int = Field(..., gt=0, description="Number of shares to buy or sell")
    price: condecimal(ge=0) = Field(..., description="Unit price paid (BUY) or received (SELL)")

    # --- Computed / Enriched Fields
    shares_filled: Optional[int] = Field(None, description="Shares actually bought or sold")
    prices_sold: Optional[list[Decimal]] = Field(None, description="Distinct lot prices a SELL consumed, cheapest first")
    realized_profit_and_loss: Optional[Decimal] = Field(None, description="Gain/loss realized by a SELL")
    error_reason: Optional[str] = Field(None, description="Reason for order processing failure")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
    )

    @field_validator("ticker", mode="before")
    @classmethod
    def _normalize_ticker(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = normalize_ticker(value)
            if not value:
                raise ValueError("Ticker is required!")
        return value
