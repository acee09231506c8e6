# portfolio_ledger/core/enums/order_side.py

from enum import Enum

class OrderSide(str, Enum):
    """
    Defines the sides an order can take against the ledger.
    Inheriting from 'str' keeps the values comparable with raw string input.
    """
    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def list(cls):
        """Returns a list of all order side values."""
        return list(map(lambda c: c.value, cls))
