"""
Transaction history aggregation for the RNS dashboard.

Both transfer directions of an address are fetched, merged on a composite
key and ordered newest first.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from rns_dashboard.clients.alchemy_client import AlchemyClient, AssetTransfersCategory, SortingOrder
from rns_dashboard.config import AggregationConfig, get_aggregation_config
from rns_dashboard.constants import TRANSFER_CATEGORIES
from rns_dashboard.models.holdings import TransactionRecord
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.utils.conversion import block_number_value, to_hex
from rns_dashboard.utils.validation import validate_address, validate_network

logger = logging.getLogger(__name__)

CATEGORIES = [AssetTransfersCategory(category) for category in TRANSFER_CATEGORIES]


def _optional_string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


async def gather_directions(sent: Awaitable[Any], received: Awaitable[Any]) -> Tuple[Any, Any]:
    """Await both directions together; the first failure is raised once both settle."""
    results = await asyncio.gather(sent, received, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results[0], results[1]


def normalize_transfer(transfer: Any) -> Optional[TransactionRecord]:
    """
    Turn a provider transfer into a record.
    
    Transfers without a hash are dropped; every other field falls back to
    empty or None.
    """
    if not isinstance(transfer, dict):
        return None
    tx_hash = transfer.get("hash")
    if not isinstance(tx_hash, str) or not tx_hash:
        return None
    
    value = transfer.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        value = None
    
    return TransactionRecord(
        hash=tx_hash,
        from_address=_optional_string(transfer.get("from")) or "",
        to_address=_optional_string(transfer.get("to")),
        asset=_optional_string(transfer.get("asset")),
        category=_optional_string(transfer.get("category")),
        value=value,
        block_number=_optional_string(transfer.get("blockNum")),
    )


def extract_transfers(response: Any) -> List[TransactionRecord]:
    """Normalize the `transfers` list of a search response."""
    transfers = response.get("transfers") if isinstance(response, dict) else None
    if not isinstance(transfers, list):
        return []
    records = (normalize_transfer(transfer) for transfer in transfers)
    return [record for record in records if record is not None]


def merge_transfers(records: Iterable[TransactionRecord]) -> List[TransactionRecord]:
    """De-duplicate on the composite key; a later duplicate replaces an earlier one."""
    merged: Dict[Tuple[str, str, str, str], TransactionRecord] = {}
    for record in records:
        merged[record.unique_key] = record
    return list(merged.values())


def sort_by_block(records: List[TransactionRecord]) -> List[TransactionRecord]:
    """Newest block first; missing or non-hex block numbers sort as block 0."""
    return sorted(records, key=lambda record: block_number_value(record.block_number), reverse=True)


class TransactionService(BaseService):
    """Aggregates the recent transfers into and out of an address."""
    
    def __init__(
        self,
        alchemy_factory: Callable[[str], AlchemyClient] = AlchemyClient.for_network,
        config: Optional[AggregationConfig] = None
    ):
        super().__init__(logger)
        self.alchemy_factory = alchemy_factory
        self.config = config or get_aggregation_config()
    
    async def _search_via_client(self, client: AlchemyClient, address: str) -> Tuple[Any, Any]:
        limit = self.config.transaction_limit
        return await gather_directions(
            client.get_asset_transfers(CATEGORIES, from_address=address, max_count=limit,
                                       order=SortingOrder.DESCENDING, with_metadata=False),
            client.get_asset_transfers(CATEGORIES, to_address=address, max_count=limit,
                                       order=SortingOrder.DESCENDING, with_metadata=False),
        )
    
    async def _search_via_raw_rpc(self, client: AlchemyClient, address: str) -> Tuple[Any, Any]:
        def query(direction: str) -> Dict[str, Any]:
            return {
                direction: address,
                "category": list(TRANSFER_CATEGORIES),
                "maxCount": to_hex(self.config.transaction_limit),
                "order": SortingOrder.DESCENDING.value,
                "withMetadata": False,
            }
        
        return await gather_directions(
            client.raw_request("alchemy_getAssetTransfers", [query("fromAddress")]),
            client.raw_request("alchemy_getAssetTransfers", [query("toAddress")]),
        )
    
    async def search_transfers(self, client: AlchemyClient, address: str) -> List[TransactionRecord]:
        """
        Fetch outgoing and incoming transfers, outgoing first.
        
        If either client query fails, both directions are fetched again
        over raw JSON-RPC.
        
        Raises:
            UpstreamError: If the raw JSON-RPC fallback fails too
        """
        sent, received = await self.fetch_with_fallback(
            [
                ("alchemy client", lambda: self._search_via_client(client, address)),
                ("raw json-rpc", lambda: self._search_via_raw_rpc(client, address)),
            ],
            f"Transfers of {address}"
        )
        return extract_transfers(sent) + extract_transfers(received)
    
    async def get_transactions(self, address: str, network: str = "mainnet") -> List[TransactionRecord]:
        """
        Get the most recent transfers of an address, newest first.
        
        Raises:
            ValidationError: If the address or network is invalid
            ConfigurationError: If no provider is configured for the network
            UpstreamError: If both search paths fail
        """
        address = validate_address(address)
        network = validate_network(network)
        client = self.alchemy_factory(network)
        
        try:
            async with self.log_timing(f"Transaction aggregation for {address} on {network}"):
                records = await self.search_transfers(client, address)
        finally:
            await client.close()
        
        ordered = sort_by_block(merge_transfers(records))
        return ordered[:self.config.transaction_limit]
