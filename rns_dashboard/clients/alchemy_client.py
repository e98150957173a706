"""Alchemy blockchain-data API client.

Token balances, token metadata and asset transfers are JSON-RPC methods on the
network endpoint; NFT ownership and contract metadata live on the NFT REST API,
whose base URL is derived from the same endpoint.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from rns_dashboard.clients.base_client import BaseRpcClient, rpc_call
from rns_dashboard.config import AlchemyConfig, get_alchemy_config
from rns_dashboard.logging_config import get_logger
from rns_dashboard.utils.conversion import to_hex
from rns_dashboard.utils.errors import ConfigurationError

logger = get_logger(__name__)


class AssetTransfersCategory(str, Enum):
    """Transfer categories understood by `alchemy_getAssetTransfers`."""
    EXTERNAL = "external"
    ERC20 = "erc20"
    ERC721 = "erc721"
    ERC1155 = "erc1155"


class SortingOrder(str, Enum):
    """Result ordering for asset transfers."""
    DESCENDING = "desc"


def nft_api_base(url: str) -> str:
    """Derive the NFT REST base URL from a JSON-RPC endpoint URL.
    
    `https://host/v2/KEY` becomes `https://host/nft/v3/KEY`.
    """
    if "/v2/" in url:
        host, key = url.split("/v2/", 1)
        return f"{host}/nft/v3/{key}".rstrip("/")
    return url.rstrip("/")


class AlchemyClient(BaseRpcClient):
    """Client for the Alchemy data API of one network."""
    
    def __init__(self, url: str, timeout: float = 30.0,
                 http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(url, timeout=timeout, http_client=http_client)
        self.nft_url = nft_api_base(url)
    
    @classmethod
    def for_network(cls, network: str, config: Optional[AlchemyConfig] = None) -> "AlchemyClient":
        """Build a client for a network from configuration.
        
        Raises:
            ConfigurationError: If no Alchemy URL or key is configured
        """
        config = config or get_alchemy_config()
        url = config.url_for(network)
        if not url:
            raise ConfigurationError(
                "Alchemy URL not configured",
                details={"network": network}
            )
        return cls(url, timeout=config.timeout)
    
    async def raw_request(self, method: str, params: List[Any]) -> Any:
        """Issue a JSON-RPC call on a fresh connection, bypassing the shared client."""
        return await rpc_call(self.url, method, params, timeout=self.timeout)

    async def get_token_balances(self, address: str) -> Dict[str, Any]:
        """Get all ERC-20 balances held by an address."""
        return await self._make_request("alchemy_getTokenBalances", [address, "erc20"])
    
    async def get_token_metadata(self, contract_address: str) -> Dict[str, Any]:
        """Get name, symbol and decimals of an ERC-20 contract."""
        return await self._make_request("alchemy_getTokenMetadata", [contract_address])
    
    async def get_asset_transfers(
        self,
        categories: List[AssetTransfersCategory],
        from_address: Optional[str] = None,
        to_address: Optional[str] = None,
        max_count: int = 20,
        order: SortingOrder = SortingOrder.DESCENDING,
        with_metadata: bool = False
    ) -> Dict[str, Any]:
        """Search transfers filtered by sender and/or recipient.
        
        Args:
            categories: Transfer categories to include
            from_address: Only transfers sent by this address
            to_address: Only transfers received by this address
            max_count: Maximum number of transfers to return
            order: Result ordering by block
            with_metadata: Whether to include block timestamps
            
        Returns:
            Response with a `transfers` list and optional `pageKey`
        """
        query: Dict[str, Any] = {
            "category": [c.value for c in categories],
            "maxCount": to_hex(max_count),
            "order": order.value,
            "withMetadata": with_metadata,
        }
        if from_address:
            query["fromAddress"] = from_address
        if to_address:
            query["toAddress"] = to_address
        return await self._make_request("alchemy_getAssetTransfers", [query])
    
    async def get_nfts_for_owner(
        self,
        owner: str,
        page_key: Optional[str] = None,
        page_size: int = 100,
        omit_metadata: bool = True
    ) -> Dict[str, Any]:
        """Get one page of NFTs owned by an address.
        
        Returns:
            Response with an `ownedNfts` list and an optional `pageKey`
        """
        params: Dict[str, Any] = {
            "owner": owner,
            "pageSize": page_size,
            "withMetadata": "false" if omit_metadata else "true",
        }
        if page_key:
            params["pageKey"] = page_key
        return await self._get_json(f"{self.nft_url}/getNFTsForOwner", params=params)
    
    async def get_contract_metadata(self, contract_address: str) -> Dict[str, Any]:
        """Get collection-level metadata of an NFT contract."""
        return await self._get_json(
            f"{self.nft_url}/getContractMetadata",
            params={"contractAddress": contract_address}
        )
