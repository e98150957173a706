"""API route for the recent transfers of an address."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse

from rns_dashboard.api_routes.error_handling import json_response, with_error_handling
from rns_dashboard.dependencies import get_transaction_service
from rns_dashboard.logging_config import get_logger, log_with_context
from rns_dashboard.services.transaction_service import TransactionService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/txs",
    tags=["transactions"],
)


@router.get("")
@with_error_handling
async def get_transactions(
    request: Request,
    address: Optional[str] = Query(None, description="Account address"),
    network: Optional[str] = Query(None, description="mainnet or testnet"),
    transaction_service: TransactionService = Depends(get_transaction_service)
) -> JSONResponse:
    """List the most recent incoming and outgoing transfers, newest first."""
    log_with_context(
        logger,
        "info",
        "Transactions requested",
        request_id=getattr(request.state, "request_id", None),
        address=address,
        network=network
    )
    records = await transaction_service.get_transactions(address, network)
    return json_response({"txs": [record.to_response() for record in records]})
