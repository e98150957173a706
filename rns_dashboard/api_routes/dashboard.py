"""API route for the full dashboard of an RNS name."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse

from rns_dashboard.api_routes.error_handling import json_response, with_error_handling
from rns_dashboard.dependencies import get_dashboard_service
from rns_dashboard.logging_config import get_logger, log_with_context
from rns_dashboard.services.dashboard_service import DashboardService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["dashboard"],
)


@router.get("")
@with_error_handling
async def get_dashboard(
    request: Request,
    name: Optional[str] = Query(None, description="The .rsk name"),
    network: Optional[str] = Query(None, description="mainnet or testnet"),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
) -> JSONResponse:
    """Resolve a name and return every dashboard section.
    
    Each section carries either `data` or `error`; a resolution failure is
    reported for the whole request instead.
    """
    log_with_context(
        logger,
        "info",
        "Dashboard requested",
        request_id=getattr(request.state, "request_id", None),
        name=name,
        network=network
    )
    return json_response(await dashboard_service.get_dashboard(name, network))
