"""Data models for the RNS dashboard."""

from rns_dashboard.models.holdings import (
    CuratedTokenBalance,
    FungibleTokenHolding,
    NameAvailability,
    NativeBalance,
    NftHolding,
    ResolvedName,
    TransactionRecord,
)

__all__ = [
    "CuratedTokenBalance",
    "FungibleTokenHolding",
    "NameAvailability",
    "NativeBalance",
    "NftHolding",
    "ResolvedName",
    "TransactionRecord",
]
