# portfolio_ledger/logic/parser.py

import logging
from typing import Any
from pydantic import ValidationError, TypeAdapter

from portfolio_ledger.core.models.order import Order
from portfolio_ledger.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

class OrderParser:
    """
    Parses raw order dictionaries into validated Order objects.
    All parsing errors are reported to the shared ErrorReporter.
    """
    def __init__(self, error_reporter: ErrorReporter):
        self._single_order_adapter = TypeAdapter(Order)
        self._error_reporter = error_reporter

    def parse_orders(self, raw_orders_data: list[dict[str, Any]]) -> list[Order]:
        """
        Parses a list of raw order dictionaries into validated Order objects.
        An order that fails parsing is still returned, as an unvalidated stub
        marked with error_reason, and the error is reported to the ErrorReporter.
        """
        logger.debug(f"OrderParser: Parsing {len(raw_orders_data)} raw orders.")
        parsed_orders: list[Order] = []

        for index, raw_order_data in enumerate(raw_orders_data):
            order_id = str(raw_order_data.get("order_id") or f"UNKNOWN_ORDER_{index}")
            try:
                parsed_orders.append(self._single_order_adapter.validate_python(raw_order_data))
                continue
            except ValidationError as e:
                error_messages = "; ".join(
                    [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()]
                )
                error_reason = f"Validation error: {error_messages}"

            logger.debug(f"OrderParser: Order {order_id} rejected: {error_reason}")
            stub = Order.model_construct(
                order_id=order_id,
                side=str(raw_order_data.get("side", "UNKNOWN")),
                ticker=str(raw_order_data.get("ticker", "UNKNOWN")),
                error_reason=error_reason,
            )
            parsed_orders.append(stub)
            self._error_reporter.add_error(order_id, error_reason)

        return parsed_orders
