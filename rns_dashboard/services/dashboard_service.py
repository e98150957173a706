"""
Full account view for an RNS name.

The name is resolved once; the balance, token, NFT and transaction sections
are then fetched concurrently and fail independently of each other.
"""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional

from rns_dashboard.services.balance_service import BalanceService
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.services.name_service import NameService
from rns_dashboard.services.nft_service import NftService
from rns_dashboard.services.token_service import TokenService
from rns_dashboard.services.transaction_service import TransactionService
from rns_dashboard.utils.errors import RnsDashboardError

logger = logging.getLogger(__name__)


def _serialize(value: Any) -> Any:
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    if hasattr(value, "to_response"):
        return value.to_response()
    return value


def section_result(result: Any) -> Dict[str, Any]:
    """Wrap one section's outcome as `{"data": ...}` or `{"error": ...}`."""
    if isinstance(result, RnsDashboardError):
        return {"error": result.message}
    if isinstance(result, Exception):
        return {"error": str(result) or result.__class__.__name__}
    return {"data": _serialize(result)}


class DashboardService(BaseService):
    """Builds the per-section dashboard of an RNS name."""
    
    def __init__(
        self,
        name_service: NameService,
        balance_service: BalanceService,
        token_service: TokenService,
        nft_service: NftService,
        transaction_service: TransactionService
    ):
        super().__init__(logger)
        self.name_service = name_service
        self.balance_service = balance_service
        self.token_service = token_service
        self.nft_service = nft_service
        self.transaction_service = transaction_service
    
    async def get_dashboard(self, name: str, network: Optional[str] = "mainnet") -> Dict[str, Any]:
        """
        Resolve a name and gather every section of its dashboard.
        
        Args:
            name: The `.rsk` name
            network: "mainnet" or "testnet"
            
        Returns:
            Name, network, address and a `sections` mapping
            
        Raises:
            ValidationError: If the name or network is invalid
            NotRegisteredError: If the name has no resolver
            NoAddressSetError: If the name has no address
            UpstreamError: If resolution fails on transport
        """
        resolved = await self.name_service.resolve_address(name, network)
        address, network = resolved.address, resolved.network
        
        sections: Dict[str, Awaitable[Any]] = {
            "rbtc": self.balance_service.get_native_balance(address, network),
            "curatedTokens": self.balance_service.get_curated_token_balances(address, network),
            "tokens": self.token_service.get_tokens(address, network),
            "nfts": self.nft_service.get_nfts(address, network),
            "txs": self.transaction_service.get_transactions(address, network),
        }
        
        async with self.log_timing(f"Dashboard sections for {resolved.name}"):
            results: List[Any] = await asyncio.gather(*sections.values(), return_exceptions=True)
        
        for key, result in zip(sections, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                self.logger.warning(f"Dashboard section {key} for {resolved.name} failed: {result}")
        
        response = resolved.to_response()
        response["sections"] = {
            key: section_result(result) for key, result in zip(sections, results)
        }
        return response
