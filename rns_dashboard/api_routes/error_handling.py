"""Error handling utilities for API endpoints."""

import functools
import traceback
from typing import Any, Awaitable, Callable, Optional

from fastapi import Request
from starlette.responses import JSONResponse

from rns_dashboard.logging_config import get_logger, log_with_context
from rns_dashboard.utils.errors import RnsDashboardError

# Set up logger
logger = get_logger(__name__)

NO_STORE_HEADERS = {"cache-control": "no-store"}


def json_response(content: Any, status_code: int = 200) -> JSONResponse:
    """Build a JSON response that must not be cached."""
    return JSONResponse(content, status_code=status_code, headers=NO_STORE_HEADERS)


def error_response(message: str, status_code: int) -> JSONResponse:
    """Build the `{"error": message}` body used by every endpoint."""
    return json_response({"error": message}, status_code=status_code)


def _request_id(args, kwargs) -> Optional[str]:
    for value in list(args) + list(kwargs.values()):
        if isinstance(value, Request):
            return getattr(value.state, "request_id", None)
    return None


def with_error_handling(func: Callable[..., Awaitable[JSONResponse]]) -> Callable[..., Awaitable[JSONResponse]]:
    """Decorator to turn errors raised by REST endpoints into JSON error responses.
    
    Dashboard errors keep their own status code; anything else becomes a 500.
    
    Args:
        func: The endpoint function to wrap
        
    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> JSONResponse:
        try:
            return await func(*args, **kwargs)
        except RnsDashboardError as e:
            level = "warning" if e.status_code < 500 else "error"
            log_with_context(
                logger,
                level,
                f"{func.__name__} failed: {e.message}",
                request_id=_request_id(args, kwargs),
                error_code=e.code.value,
                status_code=e.status_code
            )
            return error_response(e.message, e.status_code)
        except Exception as e:
            log_with_context(
                logger,
                "error",
                f"Unexpected error in {func.__name__}: {str(e)}",
                request_id=_request_id(args, kwargs),
                error_type=type(e).__name__
            )
            logger.debug(traceback.format_exc())
            return error_response(str(e) or "Internal server error", 500)
    
    return wrapper
