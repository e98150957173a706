"""API route for the NFTs owned by an address."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse

from rns_dashboard.api_routes.error_handling import json_response, with_error_handling
from rns_dashboard.dependencies import get_nft_service
from rns_dashboard.logging_config import get_logger, log_with_context
from rns_dashboard.services.nft_service import NftService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/nfts",
    tags=["nfts"],
)


@router.get("")
@with_error_handling
async def get_nfts(
    request: Request,
    address: Optional[str] = Query(None, description="Owner address"),
    network: Optional[str] = Query(None, description="mainnet or testnet"),
    nft_service: NftService = Depends(get_nft_service)
) -> JSONResponse:
    """List the NFTs owned by an address with their collection metadata."""
    log_with_context(
        logger,
        "info",
        "NFT holdings requested",
        request_id=getattr(request.state, "request_id", None),
        address=address,
        network=network
    )
    holdings = await nft_service.get_nfts(address, network)
    return json_response({"nfts": [holding.to_response() for holding in holdings]})
