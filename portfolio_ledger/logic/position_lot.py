# portfolio_ledger/logic/position_lot.py

from decimal import Decimal

from portfolio_ledger.core.models.lot import Lot


class PositionLot:
    """Tracks how many shares of a single purchased Lot are still held."""
    def __init__(self, lot_id: int, lot: Lot, shares: int):
        self.lot_id = lot_id
        self.lot = lot
        self.original_shares = shares
        self.remaining_shares = shares

    @property
    def unit_price(self) -> Decimal:
        return self.lot.unit_price

    @property
    def market_value(self) -> Decimal:
        """Value of the shares still held, at the purchase price."""
        return self.lot.unit_price * self.remaining_shares

    @property
    def is_exhausted(self) -> bool:
        return self.remaining_shares == 0

    def copy(self) -> "PositionLot":
        snapshot = PositionLot(self.lot_id, self.lot, self.original_shares)
        snapshot.remaining_shares = self.remaining_shares
        return snapshot

    def __repr__(self) -> str:
        return (f"PositionLot(lot_id={self.lot_id}, "
                f"ticker='{self.lot.ticker}', "
                f"original_shares={self.original_shares}, "
                f"remaining_shares={self.remaining_shares}, "
                f"unit_price={self.lot.unit_price})")
