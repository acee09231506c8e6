# portfolio_ledger/logic/order_executor.py

import logging
from typing import Protocol, Optional
from decimal import Decimal

from portfolio_ledger.core.models.lot import Lot
from portfolio_ledger.core.models.order import Order
from portfolio_ledger.core.enums.order_side import OrderSide
from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger
from portfolio_ledger.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)


class OrderStrategy(Protocol):
    """
    Protocol (interface) for applying one side of an order to the ledger.
    """
    def execute(
        self,
        order: Order,
        ledger: PortfolioLedger,
        error_reporter: ErrorReporter
    ) -> None:
        """
        Applies the order to the ledger and fills in its computed fields.
        Failures are reported to the error reporter, never raised.
        """
        ...


class BuyOrderStrategy:
    """Records a BUY order as a new lot."""
    def execute(
        self,
        order: Order,
        ledger: PortfolioLedger,
        error_reporter: ErrorReporter
    ) -> None:
        try:
            lot = Lot(ticker=order.ticker, description=order.description, unit_price=order.price)
            ledger.buy(lot, order.shares)
        except ValueError as e:
            error_reporter.add_error(order.order_id, str(e))
            return

        order.shares_filled = order.shares


class SellOrderStrategy:
    """Sells against the cheapest lots and records what the sale realized."""
    def execute(
        self,
        order: Order,
        ledger: PortfolioLedger,
        error_reporter: ErrorReporter
    ) -> None:
        shares_before = ledger.shares_outstanding(order.ticker)
        realized_before = ledger.realized_profit_and_loss(order.ticker) or Decimal(0)

        try:
            prices_sold = ledger.sell(order.ticker, order.shares, order.price)
        except ValueError as e:
            error_reporter.add_error(order.order_id, str(e))
            return

        if prices_sold is None:
            error_reporter.add_error(order.order_id, f"No shares of '{order.ticker}' held to sell.")
            return

        order.shares_filled = shares_before - ledger.shares_outstanding(order.ticker)
        order.prices_sold = sorted(prices_sold)
        order.realized_profit_and_loss = ledger.realized_profit_and_loss(order.ticker) - realized_before
        if order.shares_filled < order.shares:
            logger.info(f"Order {order.order_id}: partially filled {order.shares_filled} of {order.shares} {order.ticker}.")


class OrderExecutor:
    """
    Applies the appropriate strategy based on order side.
    """

    def __init__(
        self,
        ledger: PortfolioLedger,
        error_reporter: ErrorReporter
    ):
        self._ledger = ledger
        self._error_reporter = error_reporter
        self._strategies: dict[OrderSide, OrderStrategy] = {
            OrderSide.BUY: BuyOrderStrategy(),
            OrderSide.SELL: SellOrderStrategy(),
        }

    def execute_order(self, order: Order):
        """
        Delegates execution to the strategy for the order's side.
        """
        side: Optional[OrderSide] = None
        try:
            side = OrderSide(order.side.upper())
        except ValueError:
            self._error_reporter.add_error(
                order.order_id,
                f"Unknown order side '{order.side}'. Expected one of {OrderSide.list()}."
            )
            return

        self._strategies[side].execute(order, self._ledger, self._error_reporter)
