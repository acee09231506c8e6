# portfolio_ledger/core/models/request.py

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, condecimal


class BuyRequest(BaseModel):
    """
    Payload for buying a new lot of shares.
    """
    ticker: str = Field(..., description="Ticker symbol to buy")
    description: Optional[str] = Field(None, description="Security description")
    price: condecimal(ge=0) = Field(..., description="Unit price paid per share")
    shares: int = Field(..., gt=0, description="Number of shares bought")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"ticker": "GOOG", "description": "Google", "price": "530.8891", "shares": 20}
        }
    )


class SellRequest(BaseModel):
    """
    Payload for selling shares of a ticker against its cheapest lots.
    """
    ticker: str = Field(..., description="Ticker symbol to sell")
    price: Decimal = Field(..., description="Unit sale price")
    shares: int = Field(..., gt=0, description="Number of shares to sell")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"ticker": "GOOG", "price": "520.00", "shares": 6}
        }
    )


class OrderProcessingRequest(BaseModel):
    """
    Represents the input payload for the order batch processing API.
    """
    existing_lots: list[dict] = Field(
        default_factory=list,
        description="Holdings to seed the ledger with, as raw BUY orders."
    )
    new_orders: list[dict] = Field(
        ...,
        description="Orders to execute in submission order (raw dictionaries)."
    )

    model_config = ConfigDict(
        json_schema_extra = {
            "example": {
                "existing_lots": [
                    {"order_id": "seed_001", "side": "BUY", "ticker": "AAPL",
                     "description": "Apple Computer", "shares": 10, "price": "117.10129"}
                ],
                "new_orders": [
                    {"order_id": "buy_001", "side": "BUY", "ticker": "GOOG",
                     "description": "Google", "shares": 20, "price": "530.8891"},
                    {"order_id": "sell_001", "side": "SELL", "ticker": "aapl", "shares": 1, "price": "100.00"},
                    {"order_id": "sell_002", "side": "SELL", "ticker": "AMZN", "shares": 10, "price": "100.00"}
                ]
            }
        },
        extra='ignore'
    )
