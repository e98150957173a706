"""Main entry point for the RNS dashboard API server."""

# Standard library imports
import argparse
import sys
from contextlib import asynccontextmanager

# Third-party library imports
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Internal imports
from rns_dashboard import __version__
from rns_dashboard.api_routes import dashboard, nfts, rns, tokens, transactions
from rns_dashboard.api_routes.error_handling import json_response, with_error_handling
from rns_dashboard.config import get_alchemy_config, get_rootstock_config, get_server_config
from rns_dashboard.dependencies import initialize_providers, shutdown_providers
from rns_dashboard.logging_config import RequestIdMiddleware, configure_logging, get_logger

# Setup logging
configure_logging(get_server_config().log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register services on startup and release shared clients on shutdown."""
    initialize_providers()
    yield
    await shutdown_providers()


# Create FastAPI app
app = FastAPI(
    title="RNS Dashboard API",
    description="Resolves .rsk names and aggregates balances, tokens, NFTs and transfers on Rootstock",
    version=__version__,
    lifespan=lifespan,
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request ID middleware
app.add_middleware(RequestIdMiddleware)

# Include routers
app.include_router(tokens.router)
app.include_router(nfts.router)
app.include_router(transactions.router)
app.include_router(rns.router)
app.include_router(dashboard.router)

# Health check endpoint
@app.get("/health")
@with_error_handling
async def health_check():
    """Health check endpoint.
    
    Returns:
        Health status
    """
    return json_response({"status": "healthy"})

# Version endpoint
@app.get("/version")
@with_error_handling
async def version():
    """Get API version information.
    
    Returns:
        Version information
    """
    return json_response({
        "version": __version__,
        "name": "RNS Dashboard API",
    })

# Error handler for uncaught exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions.
    
    Args:
        request: FastAPI request
        exc: Exception that was raised
        
    Returns:
        JSON response with error details
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers={"cache-control": "no-store"},
    )


def run_server(port=None):
    """Run the server from command line.
    
    Args:
        port: Optional port override
    
    This function is used as an entry point in setup.py.
    """
    config = get_server_config()
    rootstock_config = get_rootstock_config()
    alchemy_config = get_alchemy_config()
    
    # Override port if specified
    if port is not None:
        try:
            config.port = int(port)
        except ValueError:
            logger.error(f"Invalid port number: {port}")
            sys.exit(1)
    
    logger.info(
        f"Starting RNS Dashboard API on {config.host}:{config.port} (Environment: {config.environment})"
    )
    logger.info(f"Using Rootstock node: {rootstock_config.mainnet_rpc_url}")
    for network in ("mainnet", "testnet"):
        if not alchemy_config.url_for(network):
            logger.warning(f"No Alchemy endpoint configured for {network}; token, NFT and transaction routes will fail")
    
    uvicorn.run(
        "rns_dashboard.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.log_level.lower(),
    )


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="RNS Dashboard API")
    parser.add_argument("--port", type=int, help="Server port")
    return parser.parse_args(argv)


if __name__ == "__main__":
    """Run the server directly when script is executed."""
    run_server(port=parse_args().port)
