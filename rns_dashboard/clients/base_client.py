"""Base JSON-RPC client.

This module provides the core functionality for making JSON-RPC requests,
both through a long-lived client and as a one-shot raw call used as the
fallback transport.
"""

# Standard library imports
import json
from typing import Any, Dict, List, Optional

# Third-party library imports
import httpx

# Internal imports
from rns_dashboard.logging_config import get_logger
from rns_dashboard.utils.errors import RpcError

# Get logger
logger = get_logger(__name__)

JSON_RPC_ID = 42
JSON_HEADERS = {"Content-Type": "application/json"}


def build_payload(method: str, params: Optional[List[Any]] = None) -> Dict[str, Any]:
    """Build a JSON-RPC 2.0 request body."""
    return {
        "jsonrpc": "2.0",
        "id": JSON_RPC_ID,
        "method": method,
        "params": params if params is not None else []
    }


def parse_rpc_response(method: str, response: httpx.Response) -> Any:
    """Extract the result of a JSON-RPC response.
    
    Raises:
        RpcError: If the HTTP status is not a success or the body carries an error
    """
    if response.is_error:
        raise RpcError(f"RPC {method} failed: {response.status_code}")
    
    try:
        body = response.json()
    except json.JSONDecodeError as e:
        raise RpcError(f"RPC {method} returned invalid JSON: {str(e)}")
    
    if not isinstance(body, dict):
        raise RpcError(f"RPC {method} returned an unexpected body")
    
    if body.get("error"):
        error = body["error"]
        message = error.get("message") if isinstance(error, dict) else None
        raise RpcError(message or "RPC error", error if isinstance(error, dict) else None)
    
    return body.get("result")


async def rpc_call(url: str, method: str, params: List[Any], timeout: float = 30.0) -> Any:
    """Make a one-shot JSON-RPC request on a fresh HTTP connection.
    
    Args:
        url: The JSON-RPC endpoint
        method: The RPC method to call
        params: The parameters to pass to the method
        timeout: Request timeout in seconds
        
    Returns:
        The `result` member of the response
        
    Raises:
        RpcError: If the server answers with an error
        httpx.HTTPError: If there's a network or request error
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(url, headers=JSON_HEADERS, json=build_payload(method, params))
        return parse_rpc_response(method, response)


class BaseRpcClient:
    """Base client holding a shared HTTP connection to a JSON-RPC endpoint."""
    
    def __init__(self, url: str, timeout: float = 30.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        """Initialize the client.
        
        Args:
            url: JSON-RPC endpoint URL
            timeout: Request timeout in seconds
            http_client: Optional pre-built HTTP client (mainly for tests)
        """
        self.url = url
        self.timeout = timeout
        self.headers = dict(JSON_HEADERS)
        self._http_client = http_client
        self._owns_client = http_client is None
    
    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazily created shared HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(max_keepalive_connections=10, max_connections=20)
            )
        return self._http_client
    
    async def _make_request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a JSON-RPC request over the shared connection.
        
        Args:
            method: The RPC method to call
            params: The parameters to pass to the method
            
        Returns:
            The JSON-RPC result
            
        Raises:
            RpcError: If the RPC server returns an error
            httpx.HTTPError: If there's a network or request error
        """
        logger.debug(f"RPC request: method={method}")
        response = await self.http_client.post(
            self.url,
            headers=self.headers,
            json=build_payload(method, params)
        )
        return parse_rpc_response(method, response)
    
    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a GET request against a REST endpoint and decode the JSON body.
        
        Raises:
            httpx.HTTPStatusError: If the server answers with an error status
        """
        response = await self.http_client.get(url, params=params)
        response.raise_for_status()
        return response.json()
    
    async def __aenter__(self):
        """Async context manager entry."""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
    
    async def close(self):
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
        self._http_client = None
