# portfolio_ledger/tests/unit/test_lot.py

import pytest
from decimal import Decimal, InvalidOperation
from pydantic import ValidationError

from portfolio_ledger.core.models.lot import Lot, normalize_ticker


def test_lot_normalizes_ticker():
    """Ticker symbols lose all whitespace and are upper-cased."""
    assert Lot(ticker="goog   ", description="Google", unit_price="1234").ticker == "GOOG"
    assert Lot(ticker=" a a\tp l ", unit_price="1").ticker == "AAPL"

def test_lot_accepts_text_price():
    lot = Lot(ticker="GOOG", description="Google", unit_price="1234.55")
    assert lot.unit_price == Decimal("1234.55")
    assert isinstance(lot.unit_price, Decimal)

def test_lot_accepts_decimal_and_zero_price():
    assert Lot(ticker="GOOG", unit_price=Decimal("0")).unit_price == Decimal("0")
    assert Lot(ticker="GOOG", unit_price=Decimal("530.8891")).unit_price == Decimal("530.8891")

def test_lot_description_is_optional():
    assert Lot(ticker="GOOG", unit_price="1").description is None

def test_lot_unparseable_price_raises_invalid_operation():
    """Malformed price text surfaces as decimal.InvalidOperation, even with a missing ticker."""
    with pytest.raises(InvalidOperation):
        Lot(ticker=None, description=None, unit_price="")
    with pytest.raises(InvalidOperation):
        Lot(ticker="GOOG", unit_price="12.3.4")

@pytest.mark.parametrize("ticker", [None, "", "   "])
def test_lot_requires_ticker(ticker):
    with pytest.raises(ValidationError) as excinfo:
        Lot(ticker=ticker, description=None, unit_price="1234")
    assert "Ticker is required!" in str(excinfo.value)

def test_lot_rejects_negative_price():
    with pytest.raises(ValidationError) as excinfo:
        Lot(ticker="GOOG", description=None, unit_price="-1234")
    assert "Price must not be negative!" in str(excinfo.value)

def test_lot_rejects_non_finite_price():
    with pytest.raises(ValidationError):
        Lot(ticker="GOOG", unit_price="NaN")

def test_lot_validation_errors_are_value_errors():
    """Callers can treat malformed lots as plain ValueErrors."""
    with pytest.raises(ValueError):
        Lot(ticker="", unit_price="1")

def test_lot_is_immutable():
    lot = Lot(ticker="GOOG", unit_price="1")
    with pytest.raises(ValidationError):
        lot.unit_price = Decimal("2")

def test_normalize_ticker():
    assert normalize_ticker(" aapl ") == "AAPL"
    assert normalize_ticker("AaPl") == "AAPL"
    assert normalize_ticker("AAPL") == "AAPL"
    with pytest.raises(ValueError):
        normalize_ticker(None)
