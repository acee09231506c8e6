# portfolio_ledger/services/order_processor.py

import logging
from collections import Counter
from typing import Any, Tuple
from portfolio_ledger.core.enums.order_side import OrderSide
from portfolio_ledger.core.models.order import Order
from portfolio_ledger.core.models.position import PositionSummary
from portfolio_ledger.core.models.response import ErroredOrder
from portfolio_ledger.logic.parser import OrderParser
from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger
from portfolio_ledger.logic.order_executor import OrderExecutor
from portfolio_ledger.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

class OrderProcessor:
    """
    Orchestrates a batch of orders against one ledger:
    parsing, seeding existing holdings, executing new orders and error reporting.
    """
    def __init__(
        self,
        parser: OrderParser,
        ledger: PortfolioLedger,
        executor: OrderExecutor,
        error_reporter: ErrorReporter
    ):
        self._parser = parser
        self._ledger = ledger
        self._executor = executor
        self._error_reporter = error_reporter

    def process_orders(
        self,
        existing_lots_raw: list[dict[str, Any]],
        new_orders_raw: list[dict[str, Any]]
    ) -> Tuple[list[Order], list[ErroredOrder], list[PositionSummary]]:
        """
        Seeds the ledger with the existing lots, executes the new orders in
        submission order and returns the processed orders, the errored
        orders and the resulting position of every ticker involved.

        Errors are reported per order_id, so an order_id used more than once
        in a batch rejects every order carrying it before anything executes.
        """
        logger.info(f"Starting order processing. Existing lots: {len(existing_lots_raw)}, New orders: {len(new_orders_raw)}")

        # 1. Parse everything up front so ids can be checked across the whole batch
        existing_lots = self._parser.parse_orders(existing_lots_raw)
        new_orders = self._parser.parse_orders(new_orders_raw)
        self._reject_duplicate_ids(existing_lots + new_orders)

        # 2. Seed holdings; only BUY orders describe a held lot
        for lot_order in existing_lots:
            if lot_order.error_reason:
                continue
            if lot_order.side.upper() != OrderSide.BUY.value:
                self._error_reporter.add_error(
                    lot_order.order_id, f"Existing lots must be BUY orders, got '{lot_order.side}'."
                )
                continue
            self._execute_guarded(lot_order)
        logger.debug(f"Seeded ledger with {len(existing_lots)} existing lots.")

        # 3. Execute new orders in the order they were submitted
        processed_orders: list[Order] = []
        for order in new_orders:
            if order.error_reason:
                continue
            self._execute_guarded(order)
            if not self._error_reporter.has_errors_for(order.order_id):
                processed_orders.append(order)

        # 4. Collect errors and resulting positions
        errored_orders = self._error_reporter.get_errors()
        touched = sorted({o.ticker for o in existing_lots + new_orders if not o.error_reason})
        positions = [self._ledger.position_summary(ticker) for ticker in touched]

        logger.info(f"Finished processing. Successfully processed {len(processed_orders)} orders, {len(errored_orders)} errors reported.")

        # The reporter is shared with the parser and executor; reset it for the next batch
        self._error_reporter.clear()

        return processed_orders, errored_orders, positions

    def _reject_duplicate_ids(self, orders: list[Order]) -> None:
        counts = Counter(order.order_id for order in orders)
        for order in orders:
            if counts[order.order_id] < 2:
                continue
            reason = f"Duplicate order_id '{order.order_id}' in batch."
            if not order.error_reason:
                order.error_reason = reason
            self._error_reporter.add_error(order.order_id, reason)

    def _execute_guarded(self, order: Order) -> None:
        try:
            self._executor.execute_order(order)
        except Exception as e:
            logger.error(f"Unexpected error while executing order {order.order_id}: {e}")
            order.error_reason = f"Unexpected processing error: {type(e).__name__}: {e}"
            self._error_reporter.add_error(order.order_id, order.error_reason)
