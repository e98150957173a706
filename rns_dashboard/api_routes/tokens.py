"""API route for the fungible token holdings of an address."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse

from rns_dashboard.api_routes.error_handling import json_response, with_error_handling
from rns_dashboard.dependencies import get_token_service
from rns_dashboard.logging_config import get_logger, log_with_context
from rns_dashboard.services.token_service import TokenService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/tokens",
    tags=["tokens"],
)


@router.get("")
@with_error_handling
async def get_tokens(
    request: Request,
    address: Optional[str] = Query(None, description="Account address"),
    network: Optional[str] = Query(None, description="mainnet or testnet"),
    token_service: TokenService = Depends(get_token_service)
) -> JSONResponse:
    """List the non-zero ERC-20 balances of an address.
    
    Returns:
        `{"tokens": [...]}` in provider order
    """
    log_with_context(
        logger,
        "info",
        "Token holdings requested",
        request_id=getattr(request.state, "request_id", None),
        address=address,
        network=network
    )
    holdings = await token_service.get_tokens(address, network)
    return json_response({"tokens": [holding.to_response() for holding in holdings]})
