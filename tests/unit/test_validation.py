"""Unit tests for input validation."""

import pytest

from rns_dashboard.utils.errors import ValidationError
from rns_dashboard.utils.validation import (
    is_valid_rns_name,
    is_zero_address,
    validate_address,
    validate_network,
    validate_rns_name,
)


@pytest.mark.parametrize("name", ["foo-bar.rsk", "alice.rsk", "A1.RSK", "  bob.rsk ", "a.rsk", "a--b.rsk"])
def test_valid_names(name):
    assert is_valid_rns_name(name)


@pytest.mark.parametrize("name", ["Foo_Bar.rsk", "foo.eth", "-foo.rsk", "foo-.rsk", ".rsk", "", None, "foo bar.rsk"])
def test_invalid_names(name):
    assert not is_valid_rns_name(name)


def test_validate_rns_name_normalizes():
    assert validate_rns_name(" Alice.RSK ") == "alice.rsk"


def test_validate_rns_name_rejects_underscore():
    with pytest.raises(ValidationError) as exc_info:
        validate_rns_name("Foo_Bar.rsk")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid .rsk name"


def test_validate_address_lowercases():
    assert validate_address("0xABCDEF") == "0xabcdef"


@pytest.mark.parametrize("address", [None, "", "   "])
def test_validate_address_missing(address):
    with pytest.raises(ValidationError, match="Missing address"):
        validate_address(address)


def test_is_zero_address():
    assert is_zero_address("0x0000000000000000000000000000000000000000")
    assert is_zero_address("")
    assert is_zero_address(None)
    assert not is_zero_address("0x0000000000000000000000000000000000000001")


def test_validate_network():
    assert validate_network(None) == "mainnet"
    assert validate_network("") == "mainnet"
    assert validate_network("TestNet") == "testnet"
    with pytest.raises(ValidationError):
        validate_network("devnet")
