"""Unit tests for NftService."""

import asyncio

import pytest

from rns_dashboard.services.nft_service import parse_contract_metadata, parse_owned_nft
from rns_dashboard.utils.errors import UpstreamError
from tests.fixtures.common import TEST_ADDRESS


def page(nfts, page_key=None):
    response = {"ownedNfts": nfts, "totalCount": len(nfts)}
    if page_key is not None:
        response["pageKey"] = page_key
    return response


class TestParseOwnedNft:
    """Test suite for parse_owned_nft."""

    def test_nested_contract_address_and_hex_token_id(self):
        nft = parse_owned_nft({"contract": {"address": "0xCC"}, "tokenId": "0x2A"})
        assert nft.contract_address == "0xCC"
        assert nft.token_id == "42"

    def test_contract_address_priority(self):
        """Top-level address wins over the nested shapes."""
        item = {
            "contractAddress": "0x01",
            "contract": {"address": "0x02", "contractAddress": "0x03"},
            "tokenId": "1",
        }
        assert parse_owned_nft(item).contract_address == "0x01"

        del item["contractAddress"]
        assert parse_owned_nft(item).contract_address == "0x02"

        del item["contract"]["address"]
        assert parse_owned_nft(item).contract_address == "0x03"

    def test_item_without_contract_is_dropped(self):
        assert parse_owned_nft({"tokenId": "1"}) is None
        assert parse_owned_nft({"contract": {}, "tokenId": "1"}) is None
        assert parse_owned_nft("garbage") is None

    def test_token_type_fallback(self):
        assert parse_owned_nft({"contractAddress": "0x01", "tokenType": "ERC721"}).token_type == "ERC721"
        nested = {"contract": {"address": "0x01", "tokenType": "ERC1155"}}
        assert parse_owned_nft(nested).token_type == "ERC1155"
        assert parse_owned_nft({"contractAddress": "0x01"}).token_type is None

    def test_unparsable_token_id_passes_through(self):
        assert parse_owned_nft({"contractAddress": "0x01", "tokenId": "abc"}).token_id == "abc"
        assert parse_owned_nft({"contractAddress": "0x01"}).token_id == ""

    def test_integer_token_id_is_rendered_in_decimal(self):
        assert parse_owned_nft({"contractAddress": "0x01", "tokenId": 42}).token_id == "42"
        assert parse_owned_nft({"contractAddress": "0x01", "tokenId": 2 ** 255}).token_id == str(2 ** 255)


def test_parse_contract_metadata_prefers_top_level():
    metadata = parse_contract_metadata({
        "name": "Top",
        "contractDeployer": "0xdeployer",
        "contractMetadata": {"name": "Nested", "symbol": "NST", "tokenType": "ERC721"},
    })
    assert metadata.name == "Top"
    assert metadata.symbol == "NST"
    assert metadata.contract_deployer == "0xdeployer"
    assert metadata.token_type == "ERC721"


def test_parse_contract_metadata_tolerates_garbage():
    metadata = parse_contract_metadata(None)
    assert metadata.name is None and metadata.symbol is None


@pytest.mark.asyncio
async def test_get_nfts(nft_service, mock_alchemy_client):
    """Test aggregation of owned NFTs with their collection metadata."""
    # Setup
    mock_alchemy_client.get_nfts_for_owner.return_value = page([
        {"contract": {"address": "0xCC"}, "tokenId": "0x2A"},
        {"contractAddress": "0xcc", "tokenId": "7", "tokenType": "ERC1155"},
        {"tokenId": "9"},
    ])
    mock_alchemy_client.get_contract_metadata.return_value = {
        "name": "Cats", "symbol": "CAT", "tokenType": "ERC721", "contractDeployer": "0xdeployer"
    }

    # Execute
    holdings = await nft_service.get_nfts(TEST_ADDRESS)

    # Verify
    assert [h.to_response() for h in holdings] == [
        {"contractAddress": "0xCC", "name": "Cats", "symbol": "CAT", "contractDeployer": "0xdeployer",
         "tokenType": "ERC721", "tokenId": "42"},
        {"contractAddress": "0xcc", "name": "Cats", "symbol": "CAT", "contractDeployer": "0xdeployer",
         "tokenType": "ERC1155", "tokenId": "7"},
    ]
    # Same contract in two cases is looked up once
    mock_alchemy_client.get_contract_metadata.assert_called_once_with("0xcc")
    mock_alchemy_client.get_nfts_for_owner.assert_called_once_with(
        TEST_ADDRESS, page_key=None, page_size=100, omit_metadata=True
    )
    mock_alchemy_client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_nfts_empty(nft_service, mock_alchemy_client):
    """Test that an account without NFTs yields an empty list."""
    # Execute
    holdings = await nft_service.get_nfts(TEST_ADDRESS)

    # Verify
    assert holdings == []
    assert not mock_alchemy_client.get_contract_metadata.called


@pytest.mark.asyncio
async def test_pagination_is_capped_at_five_pages(nft_service, mock_alchemy_client):
    """Test that discovery stops after five pages even if more remain."""
    # Setup
    counter = iter(range(100))

    async def endless(owner, page_key=None, page_size=100, omit_metadata=True):
        n = next(counter)
        return page([{"contractAddress": "0x01", "tokenId": str(n)}], page_key=f"key-{n}")

    mock_alchemy_client.get_nfts_for_owner.side_effect = endless

    # Execute
    holdings = await nft_service.get_nfts(TEST_ADDRESS)

    # Verify
    assert mock_alchemy_client.get_nfts_for_owner.call_count == 5
    assert [h.token_id for h in holdings] == ["0", "1", "2", "3", "4"]
    page_keys = [c.kwargs["page_key"] for c in mock_alchemy_client.get_nfts_for_owner.call_args_list]
    assert page_keys == [None, "key-0", "key-1", "key-2", "key-3"]


@pytest.mark.asyncio
@pytest.mark.parametrize("last_key", ["", None, 123])
async def test_pagination_stops_without_page_key(nft_service, mock_alchemy_client, last_key):
    # Setup
    mock_alchemy_client.get_nfts_for_owner.side_effect = [
        page([{"contractAddress": "0x01", "tokenId": "1"}], page_key="next"),
        page([{"contractAddress": "0x01", "tokenId": "2"}], page_key=last_key),
    ]

    # Execute
    holdings = await nft_service.get_nfts(TEST_ADDRESS)

    # Verify
    assert mock_alchemy_client.get_nfts_for_owner.call_count == 2
    assert len(holdings) == 2


@pytest.mark.asyncio
async def test_metadata_failure_is_isolated(nft_service, mock_alchemy_client):
    """Test that a failing contract lookup leaves only its own rows without metadata."""
    # Setup
    mock_alchemy_client.get_nfts_for_owner.return_value = page([
        {"contractAddress": "0xAA", "tokenId": "1", "tokenType": "ERC721"},
        {"contractAddress": "0xDD", "tokenId": "2", "tokenType": "ERC721"},
    ])

    async def metadata(contract):
        if contract == "0xdd":
            raise ConnectionError("metadata unavailable")
        return {"name": "Apes", "symbol": "APE"}

    mock_alchemy_client.get_contract_metadata.side_effect = metadata

    # Execute
    holdings = await nft_service.get_nfts(TEST_ADDRESS)

    # Verify
    assert holdings[0].name == "Apes"
    failed = holdings[1]
    assert (failed.contract_address, failed.name, failed.symbol, failed.contract_deployer) == ("0xDD", "", "", None)
    assert failed.token_type == "ERC721"


@pytest.mark.asyncio
async def test_metadata_requests_are_batched_by_six(nft_service, mock_alchemy_client):
    # Setup
    mock_alchemy_client.get_nfts_for_owner.return_value = page([
        {"contractAddress": f"0x{i:02x}", "tokenId": str(i)} for i in range(14)
    ])
    in_flight = 0
    peak = 0

    async def metadata(contract):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return {}

    mock_alchemy_client.get_contract_metadata.side_effect = metadata

    # Execute
    holdings = await nft_service.get_nfts(TEST_ADDRESS)

    # Verify
    assert len(holdings) == 14
    assert mock_alchemy_client.get_contract_metadata.call_count == 14
    assert peak == 6


@pytest.mark.asyncio
async def test_discovery_failure(nft_service, mock_alchemy_client):
    # Setup
    mock_alchemy_client.get_nfts_for_owner.side_effect = ConnectionError("gateway timeout")

    # Execute / Verify
    with pytest.raises(UpstreamError, match="gateway timeout"):
        await nft_service.get_nfts(TEST_ADDRESS)
    mock_alchemy_client.close.assert_awaited_once()
