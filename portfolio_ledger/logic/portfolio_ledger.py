# portfolio_ledger/logic/portfolio_ledger.py

import itertools
import logging
import threading
from decimal import Decimal
from typing import Dict, List, Optional, Set, Tuple

from portfolio_ledger.core.config.settings import settings
from portfolio_ledger.core.models.lot import Lot, normalize_ticker
from portfolio_ledger.core.models.position import OpenLot, PositionSummary
from portfolio_ledger.logic.position_lot import PositionLot
from portfolio_ledger.logic.ticker_locks import TickerLocks

logger = logging.getLogger(__name__)

LOT_NOT_NONE = "The specified lot must not be None."
SHARES_MUST_BE_GREATER_ZERO = "The specified number of shares must be an integer greater than zero."
SALE_PRICE_NOT_NONE = "The specified sale price must not be None."


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """
    Drops trailing zeros from a Decimal without switching whole numbers
    to exponent notation (Decimal("1000.00") -> Decimal("1000")).
    """
    normalized = value.normalize()
    if normalized.as_tuple().exponent > 0:
        # int() is exact; quantize would be bound by the context precision
        return Decimal(int(normalized))
    return normalized


def _check_shares(number_of_shares: int) -> None:
    if isinstance(number_of_shares, bool) or not isinstance(number_of_shares, int) or number_of_shares <= 0:
        raise ValueError(SHARES_MUST_BE_GREATER_ZERO)


class PortfolioLedger:
    """
    In-memory inventory of purchased lots per ticker.

    Sells consume the cheapest active lot first (purchase order breaks ties)
    and realize (sale price - unit price) * shares consumed into the ticker's
    profit or loss ledger. Every ledger instance owns its own tables.

    Individual table accesses are guarded by a single re-entrant lock. With
    ``serialize_ticker_operations`` enabled a whole buy/sell additionally runs
    under a per-ticker lock; without it, concurrent sells of the same ticker
    may both plan against the same remaining shares before either applies.
    """
    def __init__(self, serialize_ticker_operations: Optional[bool] = None):
        if serialize_ticker_operations is None:
            serialize_ticker_operations = settings.SERIALIZE_TICKER_OPERATIONS
        self._table_lock = threading.RLock()
        self._ticker_locks = TickerLocks(enabled=serialize_ticker_operations)
        self._lot_ids = itertools.count(1)
        # Active lots in purchase order: { ticker: [PositionLot, ...] }
        self._lots: Dict[str, List[PositionLot]] = {}
        # Realized amounts: { ticker: [Decimal, ...] }, seeded with a single zero on first buy
        self._profits: Dict[str, List[Decimal]] = {}
        self._losses: Dict[str, List[Decimal]] = {}
        logger.debug(f"PortfolioLedger initialized (serialize_ticker_operations={serialize_ticker_operations}).")

    # --- Mutations ---

    def buy(self, lot: Lot, number_of_shares: int) -> None:
        """
        Adds a new lot of shares for the lot's ticker. Each call records a
        separate lot, even when ticker and price match an existing one.

        Raises:
            ValueError: if lot is None or number_of_shares is not a positive integer
        """
        if lot is None:
            raise ValueError(LOT_NOT_NONE)
        _check_shares(number_of_shares)

        key = normalize_ticker(lot.ticker)
        with self._ticker_locks.for_ticker(key):
            with self._table_lock:
                position = PositionLot(next(self._lot_ids), lot, number_of_shares)
                self._lots.setdefault(key, []).append(position)
                self._profits.setdefault(key, [Decimal(0)])
                self._losses.setdefault(key, [Decimal(0)])
            logger.debug(f"Ledger: Bought lot {position.lot_id} for {key} ({number_of_shares} @ {lot.unit_price}).")

    def sell(self, ticker: str, number_of_shares: int, sale_price: Decimal) -> Optional[Set[Decimal]]:
        """
        Sells shares of a ticker, consuming the cheapest lots first.

        Returns the distinct unit prices of the lots sold from, or None when
        nothing was filled (unknown ticker or no shares left). Asking for more
        shares than are held fills what is available.

        Raises:
            ValueError: if ticker or sale_price is None, or number_of_shares is not a positive integer
        """
        if sale_price is None:
            raise ValueError(SALE_PRICE_NOT_NONE)
        _check_shares(number_of_shares)
        key = normalize_ticker(ticker)
        if not isinstance(sale_price, Decimal):
            sale_price = Decimal(str(sale_price))

        with self._ticker_locks.for_ticker(key):
            with self._table_lock:
                candidates = sorted(self._lots.get(key, []), key=lambda p: p.unit_price)

            if not candidates:
                logger.debug(f"Ledger: No lots held for {key}; nothing to sell.")
                return None

            fills = self._plan_fills(key, candidates, number_of_shares)
            if not fills:
                return None

            prices_sold = self._apply_fills(key, fills, sale_price)
            return prices_sold or None

    def _plan_fills(
        self, key: str, candidates: List[PositionLot], number_of_shares: int
    ) -> List[Tuple[PositionLot, int]]:
        """
        Walks the price-sorted lots and decides how many shares each one gives up.
        """
        available = sum(p.remaining_shares for p in candidates)
        if number_of_shares > available:
            logger.warning(f"Ledger: Sell of {number_of_shares} {key} exceeds holdings ({available}); filling {available}.")

        fills: List[Tuple[PositionLot, int]] = []
        filled = 0
        for position in candidates:
            if filled == number_of_shares:
                break
            owned = position.remaining_shares
            if owned == 0:
                continue
            consumed = min(owned, number_of_shares - filled)
            fills.append((position, consumed))
            filled += consumed
        return fills

    def _apply_fills(self, key: str, fills: List[Tuple[PositionLot, int]], sale_price: Decimal) -> Set[Decimal]:
        prices_sold: Set[Decimal] = set()
        with self._table_lock:
            for position, planned in fills:
                # Another unserialized sell may have drained this lot since planning.
                consumed = min(planned, position.remaining_shares)
                if consumed == 0:
                    continue
                realized = (sale_price - position.unit_price) * consumed
                if sale_price < position.unit_price:
                    self._losses.setdefault(key, [Decimal(0)]).append(realized)
                else:
                    self._profits.setdefault(key, [Decimal(0)]).append(realized)

                position.remaining_shares -= consumed
                prices_sold.add(position.unit_price)
                logger.debug(f"  Ledger: Consumed {consumed} from lot {position.lot_id} @ {position.unit_price}; "
                             f"remaining {position.remaining_shares}, realized {realized}.")

            active = [p for p in self._lots.get(key, []) if not p.is_exhausted]
            removed = len(self._lots.get(key, [])) - len(active)
            self._lots[key] = active
        if removed:
            logger.debug(f"Ledger: Removed {removed} exhausted lot(s) for {key}.")
        return prices_sold

    # --- Queries ---

    def _active_lots(self, ticker: str) -> List[PositionLot]:
        with self._table_lock:
            return [p.copy() for p in self._lots.get(normalize_ticker(ticker), [])]

    def find_by_ticker(self, ticker: str) -> List[Lot]:
        """Active lots for the ticker in purchase order; empty for unknown tickers."""
        return [p.lot for p in self._active_lots(ticker)]

    def open_lots(self, ticker: str) -> List[PositionLot]:
        """Snapshot copies of the active holdings for the ticker."""
        return self._active_lots(ticker)

    def value_under_management(self, ticker: str) -> Decimal:
        """Sum of unit price times remaining shares over the ticker's active lots."""
        value = sum((p.market_value for p in self._active_lots(ticker)), Decimal(0))
        return strip_trailing_zeros(value)

    def shares_outstanding(self, ticker: str) -> int:
        return sum(p.remaining_shares for p in self._active_lots(ticker))

    def realized_profit_and_loss(self, ticker: str) -> Optional[Decimal]:
        """
        Net realized gain/loss across both ledgers.
        None if the ticker was never bought; zero if bought but never sold.
        """
        key = normalize_ticker(ticker)
        with self._table_lock:
            profits = self._profits.get(key)
            losses = self._losses.get(key)
            if profits is None and losses is None:
                return None
            return sum(profits or [], Decimal(0)) + sum(losses or [], Decimal(0))

    def realized_profit(self, ticker: str) -> Optional[Decimal]:
        with self._table_lock:
            profits = self._profits.get(normalize_ticker(ticker))
            return None if profits is None else sum(profits, Decimal(0))

    def realized_loss(self, ticker: str) -> Optional[Decimal]:
        with self._table_lock:
            losses = self._losses.get(normalize_ticker(ticker))
            return None if losses is None else sum(losses, Decimal(0))

    def tickers(self) -> List[str]:
        """Every ticker ever bought, sorted."""
        with self._table_lock:
            return sorted(self._profits.keys())

    def position_summary(self, ticker: str) -> PositionSummary:
        key = normalize_ticker(ticker)
        # One lock scope so lots and realized P&L come from the same state
        with self._table_lock:
            lots = self._active_lots(key)
            realized = self.realized_profit_and_loss(key)
        return PositionSummary(
            ticker=key,
            open_lots=[
                OpenLot(
                    lot_id=p.lot_id,
                    description=p.lot.description,
                    unit_price=p.unit_price,
                    original_shares=p.original_shares,
                    remaining_shares=p.remaining_shares,
                )
                for p in lots
            ],
            shares_outstanding=sum(p.remaining_shares for p in lots),
            value_under_management=strip_trailing_zeros(sum((p.market_value for p in lots), Decimal(0))),
            realized_profit_and_loss=realized,
        )
