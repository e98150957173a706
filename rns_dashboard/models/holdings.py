"""
Account data models for the RNS dashboard.

This module defines Pydantic models for what an address holds and what it
has done. Models are built per request and serialized with camelCase keys.
"""

from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class DashboardModel(BaseModel):
    """Base model serializing with camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True)
    
    def to_response(self) -> Dict[str, Any]:
        """Dump the model with its JSON field names."""
        return self.model_dump(by_alias=True)


class FungibleTokenHolding(DashboardModel):
    """
    ERC-20 balance held by an address.
    
    The raw balance is kept as the provider reported it (usually hex) so that
    no precision is lost; name and symbol may be empty until enriched.
    """
    address: str
    name: str = ""
    symbol: str = ""
    decimals: Optional[int] = None
    balance_raw: str = Field(alias="balanceRaw")
    
    def to_response(self) -> Dict[str, Any]:
        """Dump the holding, leaving out unknown decimals."""
        exclude = {"decimals"} if self.decimals is None else set()
        return self.model_dump(by_alias=True, exclude=exclude)


class NftHolding(DashboardModel):
    """A single NFT owned by an address."""
    contract_address: str = Field(alias="contractAddress")
    name: str = ""
    symbol: str = ""
    contract_deployer: Optional[str] = Field(default=None, alias="contractDeployer")
    token_type: Optional[str] = Field(default=None, alias="tokenType")
    token_id: str = Field(alias="tokenId")


class TransactionRecord(DashboardModel):
    """A transfer into or out of an address."""
    hash: str
    from_address: str = Field(default="", alias="fromAddress")
    to_address: Optional[str] = Field(default=None, alias="toAddress")
    asset: Optional[str] = None
    category: Optional[str] = None
    value: Optional[Union[int, float, str]] = None
    block_number: Optional[str] = Field(default=None, alias="blockNum")
    
    @property
    def unique_key(self) -> Tuple[str, str, str, str]:
        """Composite identity used to merge both transfer directions."""
        return (
            self.block_number or "0x0",
            self.hash,
            self.from_address,
            self.to_address or "",
        )
    
    def to_response(self) -> Dict[str, Any]:
        """Dump the record without its block number."""
        return self.model_dump(by_alias=True, exclude={"block_number"})


class NativeBalance(DashboardModel):
    """Native RBTC balance in wei and in ether units."""
    wei: int
    ether: str
    
    def to_response(self) -> Dict[str, Any]:
        """Dump the balance with wei as a decimal string."""
        return {"wei": str(self.wei), "ether": self.ether}


class CuratedTokenBalance(DashboardModel):
    """Balance of one token from the curated per-network list."""
    address: str
    symbol: str
    name: str
    decimals: int
    balance_raw: int = Field(alias="balanceRaw")
    formatted: str
    coingecko_id: Optional[str] = Field(default=None, alias="coingeckoId")
    
    def to_response(self) -> Dict[str, Any]:
        """Dump the balance with the raw amount as a decimal string."""
        data = self.model_dump(by_alias=True)
        data["balanceRaw"] = str(self.balance_raw)
        return data


class ResolvedName(DashboardModel):
    """An RNS name and the address it resolves to."""
    name: str
    network: str
    address: str


class NameAvailability(DashboardModel):
    """Registration availability of an RNS name."""
    name: str
    network: str = "mainnet"
    available: bool
    rif_price_per_year: str = Field(default="2", alias="rifPricePerYear")
