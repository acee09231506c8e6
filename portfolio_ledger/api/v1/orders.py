# portfolio_ledger/api/v1/orders.py

from fastapi import APIRouter, Depends

from portfolio_ledger.api.v1.dependencies import get_order_processor
from portfolio_ledger.core.models.request import OrderProcessingRequest
from portfolio_ledger.core.models.response import OrderProcessingResponse
from portfolio_ledger.services.order_processor import OrderProcessor

router = APIRouter()

@router.post(
    "/process",
    response_model=OrderProcessingResponse,
    summary="Process a batch of buy and sell orders",
    description="Seeds a fresh ledger with the existing lots, executes the new orders "
                "in submission order and returns processed orders, errored orders "
                "and the resulting positions."
)
async def process_orders_endpoint(
    request: OrderProcessingRequest,
    processor: OrderProcessor = Depends(get_order_processor)
) -> OrderProcessingResponse:
    """
    API endpoint to process a batch of orders.
    """
    processed, errored, positions = processor.process_orders(
        existing_lots_raw=request.existing_lots,
        new_orders_raw=request.new_orders
    )
    return OrderProcessingResponse(
        processed_orders=processed,
        errored_orders=errored,
        positions=positions
    )
