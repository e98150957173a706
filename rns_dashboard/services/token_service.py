"""
Fungible token aggregation for the RNS dashboard.

Discovers every ERC-20 balance of an address, drops zero balances, attaches
contract metadata and, on mainnet, backfills missing names and symbols from
CoinGecko.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from rns_dashboard.clients.alchemy_client import AlchemyClient
from rns_dashboard.clients.coingecko_client import CoinGeckoClient
from rns_dashboard.config import AggregationConfig, get_aggregation_config
from rns_dashboard.models.holdings import FungibleTokenHolding
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.utils.conversion import parse_big_int
from rns_dashboard.utils.validation import validate_address, validate_network

logger = logging.getLogger(__name__)


def is_unknown(value: Optional[str]) -> bool:
    """Check whether a name or symbol is empty or the literal "unknown"."""
    text = (value or "").strip()
    return not text or text.lower() == "unknown"


def extract_nonzero_balances(response: Any) -> List[Tuple[str, str]]:
    """
    Pull (contract address, raw balance) pairs with a positive balance.
    
    Entries whose balance cannot be parsed are skipped without failing
    the rest of the list.
    """
    entries = response.get("tokenBalances") if isinstance(response, dict) else None
    if not isinstance(entries, list):
        return []
    
    holdings: List[Tuple[str, str]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        contract = entry.get("contractAddress")
        raw = entry.get("tokenBalance") or "0x0"
        if not isinstance(contract, str) or not contract:
            continue
        try:
            if parse_big_int(raw) > 0:
                holdings.append((contract, raw))
        except ValueError:
            logger.debug(f"Skipping unparsable balance {raw!r} for {contract}")
    return holdings


def build_holding(contract: str, raw_balance: str, metadata: Optional[Dict[str, Any]]) -> FungibleTokenHolding:
    """Combine a discovered balance with its (possibly missing) metadata."""
    meta = metadata if isinstance(metadata, dict) else {}
    name = meta.get("name")
    symbol = meta.get("symbol")
    decimals = meta.get("decimals")
    return FungibleTokenHolding(
        address=contract,
        name=name if isinstance(name, str) else "",
        symbol=symbol if isinstance(symbol, str) else "",
        decimals=decimals if isinstance(decimals, int) and not isinstance(decimals, bool) else None,
        balance_raw=raw_balance,
    )


def merge_backfill(holding: FungibleTokenHolding, backfill: Optional[Dict[str, Any]]) -> None:
    """Fill only the empty fields of a holding; symbols are upper-cased."""
    if not backfill:
        return
    if not (holding.name or "").strip() and backfill.get("name"):
        holding.name = backfill["name"]
    if not (holding.symbol or "").strip() and backfill.get("symbol"):
        holding.symbol = backfill["symbol"].upper()
    if holding.decimals is None and isinstance(backfill.get("decimals"), int):
        holding.decimals = backfill["decimals"]


class TokenService(BaseService):
    """Aggregates the fungible token holdings of an address."""
    
    def __init__(
        self,
        alchemy_factory: Callable[[str], AlchemyClient] = AlchemyClient.for_network,
        coingecko_client: Optional[CoinGeckoClient] = None,
        config: Optional[AggregationConfig] = None
    ):
        """
        Initialize the token service.
        
        Args:
            alchemy_factory: Builds a data-API client for a network name
            coingecko_client: Secondary metadata source used on mainnet
            config: Batch sizes
        """
        super().__init__(logger)
        self.alchemy_factory = alchemy_factory
        self.coingecko_client = coingecko_client or CoinGeckoClient()
        self.config = config or get_aggregation_config()
    
    async def discover_balances(self, client: AlchemyClient, address: str) -> List[Tuple[str, str]]:
        """
        Get the positive ERC-20 balances of an address, in provider order.
        
        Raises:
            UpstreamError: If both the client call and the raw JSON-RPC call fail
        """
        response = await self.fetch_with_fallback(
            [
                ("alchemy client", lambda: client.get_token_balances(address)),
                ("raw json-rpc", lambda: client.raw_request("alchemy_getTokenBalances", [address, "erc20", {}])),
            ],
            f"Token balances of {address}"
        )
        return extract_nonzero_balances(response)
    
    async def backfill_metadata(self, holdings: List[FungibleTokenHolding]) -> None:
        """Complete names, symbols and decimals from CoinGecko in place."""
        to_fix = [h for h in holdings if is_unknown(h.name) or is_unknown(h.symbol)]
        if not to_fix:
            return
        
        backfills = await self.gather_in_batches(
            self.coingecko_client.get_token_by_contract_address,
            [h.address for h in to_fix],
            self.config.coingecko_batch_size
        )
        for holding, backfill in zip(to_fix, backfills):
            merge_backfill(holding, backfill)
    
    async def get_tokens(self, address: str, network: str = "mainnet") -> List[FungibleTokenHolding]:
        """
        Get all non-zero fungible token holdings of an address.
        
        Metadata failures leave empty fields on the affected rows only.
        Rows keep the order in which the provider reported the balances.
        
        Raises:
            ValidationError: If the address or network is invalid
            ConfigurationError: If no provider is configured for the network
            UpstreamError: If balance discovery fails
        """
        address = validate_address(address)
        network = validate_network(network)
        client = self.alchemy_factory(network)
        
        try:
            async with self.log_timing(f"Token aggregation for {address} on {network}"):
                balances = await self.discover_balances(client, address)
                
                metadata = await self.gather_in_batches(
                    client.get_token_metadata,
                    [contract for contract, _ in balances],
                    self.config.token_metadata_batch_size
                )
                holdings = [
                    build_holding(contract, raw, meta)
                    for (contract, raw), meta in zip(balances, metadata)
                ]
                
                if network == "mainnet":
                    await self.backfill_metadata(holdings)
        finally:
            await client.close()
        
        return holdings
