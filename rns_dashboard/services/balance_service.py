"""Native and curated token balances read directly from a Rootstock node."""

import asyncio
import logging
from typing import Callable, List

from rns_dashboard.clients.rootstock_client import RootstockClient
from rns_dashboard.constants import CURATED_TOKENS, NATIVE_DECIMALS
from rns_dashboard.models.holdings import CuratedTokenBalance, NativeBalance
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.utils.conversion import format_units
from rns_dashboard.utils.validation import validate_address, validate_network

logger = logging.getLogger(__name__)


class BalanceService(BaseService):
    """Reads the RBTC balance and the curated ERC-20 balances of an address."""
    
    def __init__(self, client_factory: Callable[[str], RootstockClient] = RootstockClient.for_network):
        super().__init__(logger)
        self.client_factory = client_factory
    
    async def get_native_balance(self, address: str, network: str = "mainnet") -> NativeBalance:
        """Get the RBTC balance of an address.
        
        Raises:
            UpstreamError: If the node call fails; there is no retry
        """
        address = validate_address(address)
        client = self.client_factory(validate_network(network))
        
        try:
            wei = await self.fetch_with_fallback(
                [("node", lambda: client.get_balance(address))],
                f"Native balance of {address}"
            )
        finally:
            await client.close()
        return NativeBalance(wei=int(wei), ether=format_units(int(wei), NATIVE_DECIMALS))
    
    async def get_curated_token_balances(self, address: str, network: str = "mainnet") -> List[CuratedTokenBalance]:
        """Get balances of the curated token list; unreadable tokens are skipped."""
        address = validate_address(address)
        network = validate_network(network)
        client = self.client_factory(network)
        tokens = CURATED_TOKENS[network]
        
        try:
            results = await asyncio.gather(
                *[client.get_erc20_balance(token["address"], address) for token in tokens],
                return_exceptions=True
            )
        finally:
            await client.close()
        
        balances: List[CuratedTokenBalance] = []
        for token, result in zip(tokens, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                self.logger.debug(f"Curated token {token['address']} unreadable: {result}")
                continue
            balances.append(CuratedTokenBalance(
                address=token["address"],
                symbol=result["symbol"],
                name=result["name"],
                decimals=result["decimals"],
                balance_raw=result["raw"],
                formatted=format_units(result["raw"], result["decimals"]),
                coingecko_id=token.get("coingecko_id"),
            ))
        return balances
