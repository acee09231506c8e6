# portfolio_ledger/api/main.py

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
import uvicorn
import logging
from decimal import getcontext

from portfolio_ledger.api.v1.router import router as v1_router
from portfolio_ledger.core.config.settings import settings
from portfolio_ledger.logic.portfolio_ledger import PortfolioLedger

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(settings.APP_NAME)

# Set global Decimal precision at application startup
getcontext().prec = settings.DECIMAL_PRECISION

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG_MODE,
    description="API for tracking purchased lots per ticker, selling cheapest lots first "
                "and reporting value under management and realized profit/loss."
)

# The application owns a single ledger; endpoints reach it through a dependency
app.state.ledger = PortfolioLedger()

app.include_router(v1_router, prefix=settings.API_V1_STR)

@app.get("/", include_in_schema=False)
async def root():
    """Redirects to the API documentation."""
    return RedirectResponse(url="/docs")

# Entry point for running with Uvicorn directly (for development)
if __name__ == "__main__":
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} in {'DEBUG' if settings.DEBUG_MODE else 'PRODUCTION'} mode...")
    uvicorn.run(
        "portfolio_ledger.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG_MODE,
        log_level=settings.LOG_LEVEL.lower()
    )
