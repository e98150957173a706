"""
NFT aggregation for the RNS dashboard.

Pages through the NFTs owned by an address, normalizes each item from the
loosely typed provider payload, then attaches collection metadata.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from rns_dashboard.clients.alchemy_client import AlchemyClient
from rns_dashboard.config import AggregationConfig, get_aggregation_config
from rns_dashboard.models.holdings import NftHolding
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.utils.conversion import normalize_token_id
from rns_dashboard.utils.validation import validate_address, validate_network

logger = logging.getLogger(__name__)


class OwnedNft(BaseModel):
    """An owned NFT before collection metadata is attached."""
    contract_address: str
    token_id: str
    token_type: Optional[str] = None


class ContractMetadata(BaseModel):
    """Collection-level metadata of an NFT contract."""
    name: Optional[str] = None
    symbol: Optional[str] = None
    contract_deployer: Optional[str] = None
    token_type: Optional[str] = None


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def parse_owned_nft(item: Any) -> Optional[OwnedNft]:
    """
    Normalize one provider item.
    
    The contract address is looked up at the top level, then under
    `contract.address`, then under `contract.contractAddress`. Items without
    one are dropped.
    """
    if not isinstance(item, dict):
        return None
    contract = item.get("contract") if isinstance(item.get("contract"), dict) else {}
    
    contract_address = (
        _string(item.get("contractAddress"))
        or _string(contract.get("address"))
        or _string(contract.get("contractAddress"))
    )
    if not contract_address:
        return None
    
    return OwnedNft(
        contract_address=contract_address,
        token_id=normalize_token_id(item.get("tokenId")),
        token_type=_string(item.get("tokenType")) or _string(contract.get("tokenType")),
    )


def parse_contract_metadata(payload: Any) -> ContractMetadata:
    """Read metadata fields at the top level, falling back to `contractMetadata`."""
    data = payload if isinstance(payload, dict) else {}
    nested = data.get("contractMetadata") if isinstance(data.get("contractMetadata"), dict) else {}
    
    def pick(key: str) -> Optional[str]:
        return _string(data.get(key)) or _string(nested.get(key))
    
    return ContractMetadata(
        name=pick("name"),
        symbol=pick("symbol"),
        contract_deployer=pick("contractDeployer"),
        token_type=pick("tokenType"),
    )


class NftService(BaseService):
    """Aggregates the NFT holdings of an address."""
    
    def __init__(
        self,
        alchemy_factory: Callable[[str], AlchemyClient] = AlchemyClient.for_network,
        config: Optional[AggregationConfig] = None
    ):
        super().__init__(logger)
        self.alchemy_factory = alchemy_factory
        self.config = config or get_aggregation_config()
    
    async def discover_nfts(self, client: AlchemyClient, owner: str) -> List[OwnedNft]:
        """
        Collect owned NFTs page by page.
        
        Stops when the page key is missing or empty, and after
        `nft_max_pages` pages whatever the cursor says.
        
        Raises:
            UpstreamError: If a page request fails
        """
        owned: List[OwnedNft] = []
        page_key: Optional[str] = None
        pages = 0
        
        while True:
            response = await self.fetch_with_fallback(
                [("alchemy client", lambda: client.get_nfts_for_owner(
                    owner,
                    page_key=page_key,
                    page_size=self.config.nft_page_size,
                    omit_metadata=True
                ))],
                f"NFTs of {owner}"
            )
            pages += 1
            
            body = response if isinstance(response, dict) else {}
            items = body.get("ownedNfts")
            for item in items if isinstance(items, list) else []:
                nft = parse_owned_nft(item)
                if nft is not None:
                    owned.append(nft)
            
            next_key = body.get("pageKey")
            page_key = next_key if isinstance(next_key, str) and next_key else None
            if page_key is None or pages >= self.config.nft_max_pages:
                break
        
        return owned
    
    async def fetch_contract_metadata(self, client: AlchemyClient,
                                      contracts: List[str]) -> Dict[str, ContractMetadata]:
        """Fetch metadata of distinct contracts; failed lookups are left out."""
        results = await self.gather_in_batches(
            client.get_contract_metadata,
            contracts,
            self.config.nft_metadata_batch_size
        )
        return {
            contract: parse_contract_metadata(result)
            for contract, result in zip(contracts, results)
            if result is not None
        }
    
    async def get_nfts(self, address: str, network: str = "mainnet") -> List[NftHolding]:
        """
        Get the NFTs held by an address with their collection metadata.
        
        Returns:
            One row per owned NFT, empty when the account holds none
            
        Raises:
            ValidationError: If the address or network is invalid
            ConfigurationError: If no provider is configured for the network
            UpstreamError: If NFT discovery fails
        """
        address = validate_address(address)
        network = validate_network(network)
        client = self.alchemy_factory(network)
        
        try:
            async with self.log_timing(f"NFT aggregation for {address} on {network}"):
                owned = await self.discover_nfts(client, address)
                if not owned:
                    return []
                
                contracts = list(dict.fromkeys(nft.contract_address.lower() for nft in owned))
                metadata = await self.fetch_contract_metadata(client, contracts)
        finally:
            await client.close()
        
        holdings: List[NftHolding] = []
        for nft in owned:
            meta = metadata.get(nft.contract_address.lower(), ContractMetadata())
            holdings.append(NftHolding(
                contract_address=nft.contract_address,
                name=meta.name or "",
                symbol=meta.symbol or "",
                contract_deployer=meta.contract_deployer,
                token_type=nft.token_type or meta.token_type,
                token_id=nft.token_id,
            ))
        return holdings
