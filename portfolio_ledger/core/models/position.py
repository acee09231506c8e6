# portfolio_ledger/core/models/position.py

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class OpenLot(BaseModel):
    """
    An active holding of one purchased lot, as exposed outside the ledger.
    """
    lot_id: int = Field(..., description="Stable identifier assigned when the lot was bought")
    description: Optional[str] = Field(None, description="Free-text description of the security")
    unit_price: Decimal = Field(..., description="Price paid per share")
    original_shares: int = Field(..., description="Shares bought in this lot")
    remaining_shares: int = Field(..., description="Shares of this lot not yet sold")


class PositionSummary(BaseModel):
    """
    Aggregated view of everything the ledger holds for one ticker.
    """
    ticker: str = Field(..., description="Normalized ticker symbol")
    open_lots: list[OpenLot] = Field(default_factory=list, description="Active lots in purchase order")
    shares_outstanding: int = Field(0, description="Shares still held across all active lots")
    value_under_management: Decimal = Field(Decimal(0), description="Sum of unit price times remaining shares")
    realized_profit_and_loss: Optional[Decimal] = Field(
        None,
        description="Net realized gain/loss; null when the ticker was never bought"
    )
