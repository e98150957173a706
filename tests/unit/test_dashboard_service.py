"""Unit tests for DashboardService."""

import pytest

from rns_dashboard.services.dashboard_service import section_result
from rns_dashboard.utils.errors import NotRegisteredError, UpstreamError
from tests.fixtures.common import TEST_ADDRESS, ZERO_ADDRESS


@pytest.mark.asyncio
async def test_get_dashboard(dashboard_service, mock_alchemy_client, sample_transfers):
    """Test that every section is reported with its data."""
    # Setup
    mock_alchemy_client.get_asset_transfers.return_value = {"transfers": sample_transfers}

    # Execute
    result = await dashboard_service.get_dashboard("Alice.rsk", None)

    # Verify
    assert result["name"] == "alice.rsk"
    assert result["network"] == "mainnet"
    assert result["address"] == TEST_ADDRESS
    sections = result["sections"]
    assert set(sections) == {"rbtc", "curatedTokens", "tokens", "nfts", "txs"}
    assert sections["rbtc"] == {"data": {"wei": "1500000000000000000", "ether": "1.5"}}
    assert sections["tokens"] == {"data": []}
    assert sections["nfts"] == {"data": []}
    assert [tx["hash"] for tx in sections["txs"]["data"]] == ["0xbbb", "0xaaa"]


@pytest.mark.asyncio
async def test_failing_section_does_not_affect_others(dashboard_service, mock_alchemy_client):
    """Test that one section's error is reported next to the other sections' data."""
    # Setup
    mock_alchemy_client.get_token_balances.side_effect = ConnectionError("missing response")
    mock_alchemy_client.raw_request.side_effect = ConnectionError("token endpoint down")

    # Execute
    result = await dashboard_service.get_dashboard("alice.rsk", "mainnet")

    # Verify
    sections = result["sections"]
    assert sections["tokens"] == {"error": "token endpoint down"}
    assert "data" in sections["nfts"]
    assert "data" in sections["txs"]
    assert "data" in sections["rbtc"]


@pytest.mark.asyncio
async def test_resolution_failure_suppresses_sections(dashboard_service, mock_rootstock_client, mock_alchemy_client):
    # Setup
    mock_rootstock_client.get_resolver.return_value = ZERO_ADDRESS
    mock_rootstock_client.eth_call.return_value = "0x" + "0" * 64

    # Execute / Verify
    with pytest.raises(NotRegisteredError):
        await dashboard_service.get_dashboard("nobody.rsk")
    assert not mock_alchemy_client.get_token_balances.called
    assert not mock_rootstock_client.get_balance.called


def test_section_result():
    assert section_result(UpstreamError("down")) == {"error": "down"}
    assert section_result(RuntimeError()) == {"error": "RuntimeError"}
    assert section_result([1, 2]) == {"data": [1, 2]}
