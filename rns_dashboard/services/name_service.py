"""Name service integration for the RNS dashboard.

Resolves `.rsk` names through the RNS registry and resolver contracts. The
contract read path is tried first; if it raises, the same reads are repeated
as raw `eth_call` requests before the failure is surfaced.
"""

import logging
from typing import Callable, Optional

from rns_dashboard.clients.rootstock_client import (
    SELECTOR_ADDR,
    SELECTOR_RESOLVER,
    RootstockClient,
    decode_address_word,
    namehash,
)
from rns_dashboard.config import RootstockConfig, get_rootstock_config
from rns_dashboard.constants import RIF_PRICE_PER_YEAR
from rns_dashboard.models.holdings import NameAvailability, ResolvedName
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.utils.errors import NoAddressSetError, NotRegisteredError
from rns_dashboard.utils.validation import is_zero_address, validate_network, validate_rns_name

logger = logging.getLogger(__name__)


class NameService(BaseService):
    """Resolver for RNS names."""
    
    def __init__(
        self,
        client_factory: Callable[[str], RootstockClient] = RootstockClient.for_network,
        config: Optional[RootstockConfig] = None
    ):
        """Initialize the name service.
        
        Args:
            client_factory: Builds a node client for a network name
            config: Rootstock configuration holding the registry addresses
        """
        super().__init__(logger)
        self.client_factory = client_factory
        self.config = config or get_rootstock_config()
    
    async def _resolve_via_contracts(self, client: RootstockClient, registry: str,
                                     node: bytes, name: str) -> str:
        """Resolve with typed registry and resolver contract calls."""
        resolver = await client.get_resolver(registry, node)
        if is_zero_address(resolver):
            raise NotRegisteredError(name)
        return await client.get_addr(resolver, node)
    
    async def _resolve_via_eth_call(self, client: RootstockClient, registry: str,
                                    node: bytes, name: str) -> str:
        """Resolve with raw `eth_call` requests and hand-encoded calldata."""
        encoded_node = node.hex()
        resolver = decode_address_word(
            await client.eth_call(registry, SELECTOR_RESOLVER + encoded_node)
        )
        if is_zero_address(resolver):
            raise NotRegisteredError(name)
        return decode_address_word(
            await client.eth_call(resolver, SELECTOR_ADDR + encoded_node)
        )
    
    async def resolve_address(self, name: str, network: str = "mainnet") -> ResolvedName:
        """Resolve an RNS name to an address.
        
        Args:
            name: The `.rsk` name, in any case
            network: "mainnet" or "testnet"
            
        Returns:
            The resolved name with a lower-case address
            
        Raises:
            ValidationError: If the name or network is malformed
            NotRegisteredError: If the name has no resolver
            NoAddressSetError: If the name resolves to the zero address
            UpstreamError: If both resolution paths fail on transport
        """
        name = validate_rns_name(name)
        network = validate_network(network)
        
        client = self.client_factory(network)
        registry = self.config.registry_address(network)
        node = namehash(name)
        
        try:
            async with self.log_timing(f"Resolve {name} on {network}"):
                address = await self.fetch_with_fallback(
                    [
                        ("registry contract", lambda: self._resolve_via_contracts(client, registry, node, name)),
                        ("raw eth_call", lambda: self._resolve_via_eth_call(client, registry, node, name)),
                    ],
                    f"Resolve {name}"
                )
        finally:
            await client.close()
        
        if is_zero_address(address):
            raise NoAddressSetError(name)
        
        return ResolvedName(name=name, network=network, address=address.lower())
    
    async def check_availability(self, name: str) -> NameAvailability:
        """Check whether a `.rsk` name can be registered on mainnet.
        
        A name that fails to resolve, or resolves to the zero address, is
        reported as available.
        
        Raises:
            ValidationError: If the name is malformed
        """
        name = validate_rns_name(name)
        client = self.client_factory("mainnet")
        registry = self.config.registry_address("mainnet")
        
        try:
            address = await self._resolve_via_contracts(client, registry, namehash(name), name)
            available = is_zero_address(address)
        except Exception as e:
            self.logger.debug(f"Resolution of {name} failed, treating as available: {e}")
            available = True
        finally:
            await client.close()
        
        return NameAvailability(
            name=name,
            network="mainnet",
            available=available,
            rif_price_per_year=RIF_PRICE_PER_YEAR
        )
