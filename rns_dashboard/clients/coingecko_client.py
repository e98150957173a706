"""CoinGecko public API client used to backfill token metadata."""

from typing import Any, Dict, Optional

import httpx

from rns_dashboard.config import CoinGeckoConfig, get_coingecko_config
from rns_dashboard.logging_config import get_logger

logger = get_logger(__name__)


class CoinGeckoClient:
    """Client for CoinGecko API."""
    
    def __init__(self, config: Optional[CoinGeckoConfig] = None,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.config = config or get_coingecko_config()
        self.base_url = self.config.base_url.rstrip("/")
        self.api_key = self.config.api_key
        self._http_client = http_client
        self._owns_client = http_client is None
    
    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazily created shared HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http_client
    
    async def _make_request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a request to CoinGecko API."""
        url = f"{self.base_url}/{endpoint}"
        headers = {"accept": "application/json"}
        
        if self.api_key:
            headers["x-cg-pro-api-key"] = self.api_key
        
        response = await self.http_client.get(url, params=params or {}, headers=headers)
        response.raise_for_status()
        return response.json()
    
    async def get_token_by_contract_address(self, contract_address: str) -> Optional[Dict[str, Any]]:
        """Get name, symbol and decimals of a token by contract address.
        
        Returns:
            Dict with `name`, `symbol` and `decimals` keys (any may be None),
            or None when the lookup fails
        """
        endpoint = f"coins/{self.config.platform}/contract/{contract_address.lower()}"
        try:
            data = await self._make_request(endpoint)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Token info by address failed for {contract_address}: {e}")
            return None
        
        if not isinstance(data, dict):
            return None
        
        platforms = data.get("detail_platforms") or {}
        platform = platforms.get(self.config.platform) or {}
        decimals = platform.get("decimal_place") if isinstance(platform, dict) else None
        
        return {
            "name": data.get("name") if isinstance(data.get("name"), str) else None,
            "symbol": data.get("symbol") if isinstance(data.get("symbol"), str) else None,
            "decimals": decimals if isinstance(decimals, int) and not isinstance(decimals, bool) else None,
        }
    
    async def close(self):
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
        self._http_client = None
