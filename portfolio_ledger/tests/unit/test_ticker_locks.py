# portfolio_ledger/tests/unit/test_ticker_locks.py

import pytest
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from decimal import Decimal

from portfolio_ledger.core.models.lot import Lot
from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger
from portfolio_ledger.logic.ticker_locks import TickerLocks


def test_same_ticker_shares_one_lock():
    locks = TickerLocks()
    assert locks.for_ticker("AAPL") is locks.for_ticker("AAPL")
    assert locks.for_ticker("AAPL") is not locks.for_ticker("GOOG")

def test_lock_is_reentrant():
    locks = TickerLocks()
    with locks.for_ticker("AAPL"):
        with locks.for_ticker("AAPL"):
            pass

def test_disabled_locks_are_no_ops():
    locks = TickerLocks(enabled=False)
    assert locks.enabled is False
    assert isinstance(locks.for_ticker("AAPL"), nullcontext)

@pytest.mark.parametrize("serialize", [True, False])
def test_ledger_setting_controls_serialization(serialize):
    ledger = PortfolioLedger(serialize_ticker_operations=serialize)
    assert ledger._ticker_locks.enabled is serialize

def test_concurrent_buys_and_sells_conserve_shares():
    """With per-ticker serialization every share is sold exactly once."""
    ledger = PortfolioLedger(serialize_ticker_operations=True)
    prices = [Decimal(10 + i % 7) for i in range(400)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda p: ledger.buy(Lot(ticker="ACME", unit_price=p), 1), prices))
    assert ledger.shares_outstanding("ACME") == 400

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: ledger.sell("ACME", 1, Decimal("20")), range(300)))

    assert all(r is not None for r in results)
    assert ledger.shares_outstanding("ACME") == 100
    assert len(ledger.find_by_ticker("ACME")) == 100
    # Cheapest first: the 100 lots left are the most expensive ones
    assert all(l.unit_price >= Decimal("15") for l in ledger.find_by_ticker("ACME"))
    expected = sum((Decimal("20") - p for p in sorted(prices)[:300]), Decimal(0))
    assert ledger.realized_profit_and_loss("ACME") == expected
