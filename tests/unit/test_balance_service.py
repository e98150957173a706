"""Unit tests for BalanceService."""

import pytest

from rns_dashboard.constants import CURATED_TOKENS
from rns_dashboard.utils.errors import UpstreamError, ValidationError
from tests.fixtures.common import TEST_ADDRESS


@pytest.mark.asyncio
async def test_get_native_balance(balance_service, mock_rootstock_client):
    # Execute
    result = await balance_service.get_native_balance(TEST_ADDRESS.upper().replace("0X", "0x"))

    # Verify
    assert result.wei == 1500000000000000000
    assert result.ether == "1.5"
    assert result.to_response() == {"wei": "1500000000000000000", "ether": "1.5"}
    mock_rootstock_client.get_balance.assert_called_once_with(TEST_ADDRESS)
    mock_rootstock_client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_native_balance_failure_is_not_retried(balance_service, mock_rootstock_client):
    # Setup
    mock_rootstock_client.get_balance.side_effect = ConnectionError("node down")

    # Execute / Verify
    with pytest.raises(UpstreamError):
        await balance_service.get_native_balance(TEST_ADDRESS)
    assert mock_rootstock_client.get_balance.call_count == 1
    mock_rootstock_client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_native_balance_requires_address(balance_service, mock_rootstock_client):
    with pytest.raises(ValidationError):
        await balance_service.get_native_balance("")
    assert not mock_rootstock_client.get_balance.called


@pytest.mark.asyncio
async def test_curated_balances_skip_unreadable_tokens(balance_service, mock_rootstock_client):
    """Test that a token whose reads fail is left out of the list."""
    # Setup
    rif, rdoc = CURATED_TOKENS["mainnet"]

    async def read(token_address, owner):
        if token_address == rdoc["address"]:
            raise ValueError("execution reverted")
        return {"raw": 2500000000000000000, "symbol": "RIF", "name": "RIF", "decimals": 18}

    mock_rootstock_client.get_erc20_balance.side_effect = read

    # Execute
    balances = await balance_service.get_curated_token_balances(TEST_ADDRESS, "mainnet")

    # Verify
    assert len(balances) == 1
    assert balances[0].to_response() == {
        "address": rif["address"],
        "symbol": "RIF",
        "name": "RIF",
        "decimals": 18,
        "balanceRaw": "2500000000000000000",
        "formatted": "2.5",
        "coingeckoId": "rif-token",
    }


@pytest.mark.asyncio
async def test_curated_balances_use_network_list(balance_service, mock_rootstock_client):
    # Execute
    balances = await balance_service.get_curated_token_balances(TEST_ADDRESS, "testnet")

    # Verify
    assert [b.address for b in balances] == [t["address"] for t in CURATED_TOKENS["testnet"]]
    mock_rootstock_client.close.assert_awaited_once()
