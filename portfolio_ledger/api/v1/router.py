# portfolio_ledger/api/v1/router.py

from fastapi import APIRouter
from portfolio_ledger.api.v1.portfolio import router as portfolio_router
from portfolio_ledger.api.v1.orders import router as orders_router

# Create a main router for API version 1
router = APIRouter()

router.include_router(portfolio_router, prefix="/portfolio", tags=["Portfolio"])
router.include_router(orders_router, prefix="/orders", tags=["Orders"])
