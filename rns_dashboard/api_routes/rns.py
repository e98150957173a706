"""API routes for RNS name availability and resolution."""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse

from rns_dashboard.api_routes.error_handling import json_response, with_error_handling
from rns_dashboard.dependencies import get_balance_service, get_name_service
from rns_dashboard.logging_config import get_logger, log_with_context
from rns_dashboard.services.balance_service import BalanceService
from rns_dashboard.services.name_service import NameService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/rns",
    tags=["rns"],
)


@router.get("/availability")
@with_error_handling
async def get_availability(
    request: Request,
    name: Optional[str] = Query(None, description="The .rsk name"),
    name_service: NameService = Depends(get_name_service)
) -> JSONResponse:
    """Report whether a `.rsk` name is free to register on mainnet."""
    log_with_context(
        logger,
        "info",
        "Name availability requested",
        request_id=getattr(request.state, "request_id", None),
        name=name
    )
    availability = await name_service.check_availability(name)
    return json_response(availability.to_response())


@router.get("/resolve")
@with_error_handling
async def resolve_name(
    request: Request,
    name: Optional[str] = Query(None, description="The .rsk name"),
    network: Optional[str] = Query(None, description="mainnet or testnet"),
    name_service: NameService = Depends(get_name_service),
    balance_service: BalanceService = Depends(get_balance_service)
) -> JSONResponse:
    """Resolve a name and read its RBTC and curated token balances.
    
    A failure reading the RBTC balance fails the request; unreadable curated
    tokens are left out.
    """
    log_with_context(
        logger,
        "info",
        "Name resolution requested",
        request_id=getattr(request.state, "request_id", None),
        name=name,
        network=network
    )
    resolved = await name_service.resolve_address(name, network)
    rbtc, tokens = await asyncio.gather(
        balance_service.get_native_balance(resolved.address, resolved.network),
        balance_service.get_curated_token_balances(resolved.address, resolved.network),
    )
    
    response = resolved.to_response()
    response["rbtc"] = rbtc.to_response()
    response["tokens"] = [token.to_response() for token in tokens]
    return json_response(response)
