# portfolio_ledger/api/v1/portfolio.py

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from portfolio_ledger.api.v1.dependencies import get_ledger
from portfolio_ledger.core.models.lot import Lot
from portfolio_ledger.core.models.position import PositionSummary
from portfolio_ledger.core.models.request import BuyRequest, SellRequest
from portfolio_ledger.core.models.response import SaleResponse
from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[str],
    summary="List tickers under management",
    description="Returns every ticker that has ever been bought, sorted."
)
async def list_tickers_endpoint(ledger: PortfolioLedger = Depends(get_ledger)) -> list[str]:
    return ledger.tickers()


@router.get(
    "/{ticker}",
    response_model=PositionSummary,
    summary="Get the position held for a ticker",
    description="Unknown tickers return an empty position with a null realized profit/loss."
)
async def get_position_endpoint(
    ticker: str,
    ledger: PortfolioLedger = Depends(get_ledger)
) -> PositionSummary:
    return ledger.position_summary(ticker)


@router.post(
    "/buy",
    response_model=PositionSummary,
    status_code=status.HTTP_201_CREATED,
    summary="Buy a new lot of shares",
    description="Records a new lot for the ticker; lots are never merged."
)
async def buy_endpoint(
    request: BuyRequest,
    ledger: PortfolioLedger = Depends(get_ledger)
) -> PositionSummary:
    try:
        lot = Lot(ticker=request.ticker, description=request.description, unit_price=request.price)
        ledger.buy(lot, request.shares)
    except ValueError as e:
        logger.debug(f"Rejected buy of {request.ticker}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ledger.position_summary(lot.ticker)


@router.post(
    "/sell",
    response_model=SaleResponse,
    summary="Sell shares, cheapest lots first",
    description="Fills as many of the requested shares as are held. "
                "prices_sold is empty when nothing could be sold."
)
async def sell_endpoint(
    request: SellRequest,
    ledger: PortfolioLedger = Depends(get_ledger)
) -> SaleResponse:
    try:
        prices_sold = ledger.sell(request.ticker, request.shares, request.price)
    except (ValueError, ArithmeticError) as e:
        logger.debug(f"Rejected sell of {request.ticker}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    summary = ledger.position_summary(request.ticker)
    return SaleResponse(
        ticker=summary.ticker,
        prices_sold=sorted(prices_sold or []),
        realized_profit_and_loss=summary.realized_profit_and_loss
    )
