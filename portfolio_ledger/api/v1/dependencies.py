# portfolio_ledger/api/v1/dependencies.py

from fastapi import Request

from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger
from portfolio_ledger.logic.error_reporter import ErrorReporter
from portfolio_ledger.logic.parser import OrderParser
from portfolio_ledger.logic.order_executor import OrderExecutor
from portfolio_ledger.services.order_processor import OrderProcessor


def get_ledger(request: Request) -> PortfolioLedger:
    """Provides the ledger owned by the running application."""
    return request.app.state.ledger


def get_order_processor() -> OrderProcessor:
    """
    Provides a new OrderProcessor over a fresh ledger, so each batch
    is processed independently of the application's own holdings.
    """
    error_reporter = ErrorReporter()
    ledger = PortfolioLedger()
    return OrderProcessor(
        parser=OrderParser(error_reporter=error_reporter),
        ledger=ledger,
        executor=OrderExecutor(ledger=ledger, error_reporter=error_reporter),
        error_reporter=error_reporter
    )
