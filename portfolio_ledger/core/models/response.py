# portfolio_ledger/core/models/response.py

from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from portfolio_ledger.core.models.order import Order
from portfolio_ledger.core.models.position import PositionSummary


class ErroredOrder(BaseModel):
    """
    Represents an order that failed processing, along with the reason for failure.
    """
    order_id: str = Field(..., description="The ID of the order that failed.")
    error_reason: str = Field(..., description="The reason why the order processing failed.")


class SaleResponse(BaseModel):
    """
    Outcome of a single sell against the ledger.
    """
    ticker: str = Field(..., description="Normalized ticker symbol")
    prices_sold: List[Decimal] = Field(
        default_factory=list,
        description="Distinct unit prices of the lots sold from, cheapest first; empty when nothing was filled."
    )
    realized_profit_and_loss: Optional[Decimal] = Field(None, description="Net realized gain/loss after the sale")


class OrderProcessingResponse(BaseModel):
    """
    Represents the output response from the order batch processing API.
    """
    processed_orders: List[Order] = Field(
        ...,
        description="Orders executed successfully, with computed fields filled in."
    )
    errored_orders: List[ErroredOrder] = Field(
        default_factory=list,
        description="Orders that failed validation or execution, with error reasons."
    )
    positions: List[PositionSummary] = Field(
        default_factory=list,
        description="Resulting position for every ticker touched by the batch."
    )
