# portfolio_ledger/core/models/lot.py

import re
from decimal import Decimal
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

_WHITESPACE = re.compile(r"\s")

TICKER_NOT_NONE = "The specified stock ticker must not be None."


def normalize_ticker(ticker: str) -> str:
    """
    Removes all whitespace from a ticker symbol and upper-cases it,
    so " aapl ", "AAPL" and "AaPl" all resolve to the same key.
    """
    if ticker is None:
        raise ValueError(TICKER_NOT_NONE)
    return _WHITESPACE.sub("", ticker).upper()


class Lot(BaseModel):
    """
    Represents one purchase of a ticker at a given unit price.
    Lots are immutable; the ledger tracks how many of their shares remain.
    """
    ticker: str = Field(..., description="Normalized ticker symbol (upper case, no whitespace)")
    description: Optional[str] = Field(None, description="Free-text description of the security")
    unit_price: Decimal = Field(..., description="Price paid per share")

    model_config = ConfigDict(frozen=True)

    @field_validator("ticker", mode="before")
    @classmethod
    def _normalize_ticker(cls, value: Any) -> Any:
        if value is None or value == "":
            raise ValueError("Ticker is required!")
        if isinstance(value, str):
            value = normalize_ticker(value)
            if not value:
                raise ValueError("Ticker is required!")
        return value

    @field_validator("unit_price", mode="before")
    @classmethod
    def _parse_price_text(cls, value: Any) -> Any:
        # Text prices are parsed here so malformed input surfaces as
        # decimal.InvalidOperation instead of a validation error.
        if isinstance(value, str):
            return Decimal(value)
        return value

    @field_validator("unit_price")
    @classmethod
    def _check_price(cls, value: Decimal) -> Decimal:
        if not value.is_finite():
            raise ValueError("Price must be a finite number!")
        if value < 0:
            raise ValueError("Price must not be negative!")
        return value

    def __str__(self) -> str:
        return f"Lot[description = {self.description}, unit_price = {self.unit_price}, ticker = {self.ticker}]"
