# portfolio_ledger/tests/integration/test_api_portfolio.py

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from portfolio_ledger.api.main import app
from portfolio_ledger.core.models.position import PositionSummary
from portfolio_ledger.core.models.response import SaleResponse
from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger


@pytest.fixture(scope="module")
def client():
    """Provides a TestClient for the FastAPI application."""
    with TestClient(app) as c:
        yield c

@pytest.fixture(autouse=True)
def fresh_ledger():
    """Every test starts from an empty application ledger."""
    app.state.ledger = PortfolioLedger()
    yield app.state.ledger


def post_buy(client, ticker, price, shares, description=None):
    return client.post("/api/v1/portfolio/buy",
                       json={"ticker": ticker, "description": description, "price": price, "shares": shares})

def post_sell(client, ticker, price, shares):
    return client.post("/api/v1/portfolio/sell", json={"ticker": ticker, "price": price, "shares": shares})


def test_end_to_end_scenario(client):
    response = post_buy(client, "AAPL", "117.10129", 10, "Apple Computer")
    assert response.status_code == 201
    aapl = PositionSummary(**response.json())
    assert aapl.value_under_management == Decimal("1171.0129")

    post_buy(client, "GOOG", "530.8891", 20, "Google")
    goog = PositionSummary(**post_buy(client, "GOOG", "529.1123", 5, "Google").json())
    assert goog.value_under_management == Decimal("13263.3435")
    assert goog.shares_outstanding == 25

    response = post_sell(client, "GOOG", "520.00", 6)
    assert response.status_code == 200
    sale = SaleResponse(**response.json())
    assert sale.prices_sold == [Decimal("529.1123"), Decimal("530.8891")]

    goog = PositionSummary(**client.get("/api/v1/portfolio/goog").json())
    assert goog.shares_outstanding == 19
    assert goog.value_under_management == Decimal("10086.8929")

    sale = SaleResponse(**post_sell(client, "aapl ", "100.00", 1).json())
    assert sale.ticker == "AAPL"
    assert sale.realized_profit_and_loss == Decimal("-17.10129")

def test_get_unknown_ticker_is_empty_position(client):
    response = client.get("/api/v1/portfolio/AMZN")

    assert response.status_code == 200
    body = response.json()
    assert body["ticker"] == "AMZN"
    assert body["open_lots"] == []
    assert body["shares_outstanding"] == 0
    assert Decimal(body["value_under_management"]) == Decimal("0")
    assert body["realized_profit_and_loss"] is None

def test_sell_unknown_ticker_returns_no_prices(client, fresh_ledger):
    response = post_sell(client, "AMZN", "100.00", 10)

    assert response.status_code == 200
    assert response.json()["prices_sold"] == []
    assert response.json()["realized_profit_and_loss"] is None
    assert fresh_ledger.tickers() == []

def test_list_tickers(client):
    post_buy(client, "msft", "50", 1)
    post_buy(client, "AAPL", "100", 1)

    response = client.get("/api/v1/portfolio")
    assert response.status_code == 200
    assert response.json() == ["AAPL", "MSFT"]

@pytest.mark.parametrize("payload", [
    {"ticker": "AMZN", "price": "1234", "shares": 0},
    {"ticker": "AMZN", "price": "1234", "shares": -1},
    {"ticker": "AMZN", "price": "-1", "shares": 1},
    {"ticker": "AMZN", "price": "abc", "shares": 1},
])
def test_buy_request_validation(client, payload):
    response = client.post("/api/v1/portfolio/buy", json=payload)
    assert response.status_code == 422

def test_buy_blank_ticker_rejected_by_lot(client, fresh_ledger):
    response = post_buy(client, "   ", "10", 1)
    assert response.status_code == 400
    assert "Ticker is required!" in response.json()["detail"]
    assert fresh_ledger.tickers() == []

def test_sell_request_validation(client):
    response = post_sell(client, "AMZN", "100.00", 0)
    assert response.status_code == 422

def test_sell_arithmetic_failure_is_rejected(client, fresh_ledger):
    post_buy(client, "OVF", "1", 10)
    response = post_sell(client, "OVF", "1E+999999", 10)
    assert response.status_code == 400
    assert fresh_ledger.shares_outstanding("OVF") == 10

def test_root_redirects_to_docs(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/docs"
