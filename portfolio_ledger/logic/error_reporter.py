# portfolio_ledger/logic/error_reporter.py

from portfolio_ledger.core.models.response import ErroredOrder

class ErrorReporter:
    """
    Per-batch collector of order failures, keyed by order_id.

    The parser, the executor strategies and the processor all report into
    the same instance; the processor reads has_errors_for() to decide
    whether an executed order counts as processed.
    """
    def __init__(self):
        self._errored_orders: dict[str, ErroredOrder] = {}

    def add_error(self, order_id: str, error_reason: str):
        """
        Records a failure for an order. A different reason reported later
        for the same order_id is joined onto the first with "; ".
        """
        entry = self._errored_orders.get(order_id)
        if entry is None:
            self._errored_orders[order_id] = ErroredOrder(order_id=order_id, error_reason=error_reason)
        elif error_reason not in entry.error_reason:
            entry.error_reason += f"; {error_reason}"

    def get_errors(self) -> list[ErroredOrder]:
        """Failures in the order their order_id first errored."""
        return list(self._errored_orders.values())

    def has_errors(self) -> bool:
        return bool(self._errored_orders)

    def has_errors_for(self, order_id: str) -> bool:
        return order_id in self._errored_orders

    def clear(self):
        self._errored_orders = {}
