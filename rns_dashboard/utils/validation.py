"""Validation utilities for the RNS dashboard.

This module provides validation for RNS names, addresses and network selectors.
All of them run before any network call is made.
"""

import re
from typing import Optional

from rns_dashboard.config import NETWORKS
from rns_dashboard.utils.errors import ValidationError

RNS_SUFFIX = ".rsk"

# Label: alphanumerics, inner hyphens allowed, no leading/trailing hyphen
RNS_LABEL_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_name(name: Optional[str]) -> str:
    """Trim and lower-case an RNS name."""
    return (name or "").strip().lower()


def is_valid_rns_name(name: Optional[str]) -> bool:
    """Check whether a name is a well-formed `.rsk` name.
    
    Args:
        name: The name to check, in any case
        
    Returns:
        True if the name ends in `.rsk` and has a valid label
    """
    normalized = normalize_name(name)
    if not normalized.endswith(RNS_SUFFIX):
        return False
    label = normalized[:-len(RNS_SUFFIX)]
    return bool(RNS_LABEL_PATTERN.match(label))


def validate_rns_name(name: Optional[str]) -> str:
    """Validate an RNS name and return its normalized form.
    
    Raises:
        ValidationError: If the name is not a valid `.rsk` name
    """
    if not is_valid_rns_name(name):
        raise ValidationError("Invalid .rsk name", details={"name": name})
    return normalize_name(name)


def normalize_address(address: Optional[str]) -> str:
    """Lower-case an address for use as a key or in comparisons."""
    return (address or "").strip().lower()


def is_zero_address(address: Optional[str]) -> bool:
    """Check whether an address is empty or the all-zero address."""
    normalized = normalize_address(address)
    return not normalized or normalized == ZERO_ADDRESS


def validate_address(address: Optional[str]) -> str:
    """Validate that an address was supplied and return it lower-cased.
    
    Raises:
        ValidationError: If the address is missing
    """
    normalized = normalize_address(address)
    if not normalized:
        raise ValidationError("Missing address")
    return normalized


def validate_network(network: Optional[str]) -> str:
    """Validate a network selector, defaulting to mainnet.
    
    Raises:
        ValidationError: If the network is not mainnet or testnet
    """
    if not network:
        return "mainnet"
    normalized = network.strip().lower()
    if normalized not in NETWORKS:
        raise ValidationError(
            f"Invalid network: {network}",
            details={"valid_values": list(NETWORKS)}
        )
    return normalized
