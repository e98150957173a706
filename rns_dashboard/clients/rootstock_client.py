"""Rootstock node client for contract reads and native balances."""

import asyncio
from typing import Any, Dict, Optional

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from rns_dashboard.clients.base_client import rpc_call
from rns_dashboard.config import RootstockConfig, get_rootstock_config
from rns_dashboard.logging_config import get_logger

logger = get_logger(__name__)

# Standard ERC20 ABI for balanceOf, name, symbol, decimals
ERC20_ABI = [
    {"constant": True, "inputs": [{"name": "owner", "type": "address"}], "name": "balanceOf",
     "outputs": [{"name": "", "type": "uint256"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "name", "outputs": [
        {"name": "", "type": "string"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "symbol", "outputs": [
        {"name": "", "type": "string"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "decimals", "outputs": [
        {"name": "", "type": "uint8"}], "type": "function"},
]

RNS_REGISTRY_ABI = [
    {"constant": True, "inputs": [{"name": "node", "type": "bytes32"}], "name": "resolver",
     "outputs": [{"name": "", "type": "address"}], "type": "function"},
]

ADDR_RESOLVER_ABI = [
    {"constant": True, "inputs": [{"name": "node", "type": "bytes32"}], "name": "addr",
     "outputs": [{"name": "", "type": "address"}], "type": "function"},
]

# Function selectors pre-computed with keccak-256
SELECTOR_RESOLVER = "0x0178b8bf"  # resolver(bytes32)
SELECTOR_ADDR = "0x3b3b57de"      # addr(bytes32)


def namehash(name: str) -> bytes:
    """Compute the EIP-137 namehash of a dotted name."""
    node = b"\x00" * 32
    if name:
        for label in reversed(name.split(".")):
            node = bytes(Web3.keccak(node + bytes(Web3.keccak(text=label))))
    return node


def decode_address_word(result: Optional[str]) -> str:
    """Decode an ABI-encoded address return value to a lower-case address."""
    if not result or result == "0x":
        return "0x" + "0" * 40
    word = result[2:] if result.startswith("0x") else result
    return "0x" + word[-40:].rjust(40, "0").lower()


class RootstockClient:
    """Client for a Rootstock node of one network."""
    
    def __init__(self, rpc_url: str, timeout: float = 30.0, w3: Optional[AsyncWeb3] = None):
        """Initialize the client.
        
        Args:
            rpc_url: JSON-RPC URL of the node
            timeout: Request timeout in seconds
            w3: Optional pre-built web3 instance (mainly for tests)
        """
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.w3 = w3 or AsyncWeb3(
            AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)})
        )
    
    @classmethod
    def for_network(cls, network: str, config: Optional[RootstockConfig] = None) -> "RootstockClient":
        """Build a client for a network from configuration."""
        config = config or get_rootstock_config()
        return cls(config.rpc_url(network), timeout=config.timeout)
    
    async def close(self):
        """Close the HTTP session held by the web3 provider."""
        await self.w3.provider.disconnect()
    
    async def get_balance(self, address: str) -> int:
        """Get the native balance of an address in wei."""
        return await self.w3.eth.get_balance(Web3.to_checksum_address(address))
    
    async def get_resolver(self, registry_address: str, node: bytes) -> str:
        """Read the resolver of a node from the RNS registry contract."""
        registry = self.w3.eth.contract(
            address=Web3.to_checksum_address(registry_address),
            abi=RNS_REGISTRY_ABI
        )
        resolver = await registry.functions.resolver(node).call()
        return resolver.lower()
    
    async def get_addr(self, resolver_address: str, node: bytes) -> str:
        """Read the address record of a node from a resolver contract."""
        resolver = self.w3.eth.contract(
            address=Web3.to_checksum_address(resolver_address),
            abi=ADDR_RESOLVER_ABI
        )
        address = await resolver.functions.addr(node).call()
        return address.lower()
    
    async def eth_call(self, to: str, data: str) -> str:
        """Call a contract through a raw `eth_call` JSON-RPC request."""
        return await rpc_call(
            self.rpc_url,
            "eth_call",
            [{"to": to, "data": data}, "latest"],
            timeout=self.timeout
        )
    
    async def get_erc20_balance(self, token_address: str, owner: str) -> Dict[str, Any]:
        """Read balance, name, symbol and decimals of an ERC-20 token.
        
        Raises:
            Exception: Any web3 or transport error from the four reads
        """
        contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=ERC20_ABI
        )
        raw, symbol, name, decimals = await asyncio.gather(
            contract.functions.balanceOf(Web3.to_checksum_address(owner)).call(),
            contract.functions.symbol().call(),
            contract.functions.name().call(),
            contract.functions.decimals().call(),
        )
        return {
            "raw": int(raw),
            "symbol": symbol,
            "name": name,
            "decimals": int(decimals),
        }
