"""Common test fixtures for RNS dashboard tests.

This module provides fixtures that can be reused across different test modules.
"""

import pytest
from unittest.mock import AsyncMock

from rns_dashboard.clients.alchemy_client import AlchemyClient
from rns_dashboard.clients.coingecko_client import CoinGeckoClient
from rns_dashboard.clients.rootstock_client import RootstockClient
from rns_dashboard.config import AggregationConfig, RootstockConfig
from rns_dashboard.services.balance_service import BalanceService
from rns_dashboard.services.dashboard_service import DashboardService
from rns_dashboard.services.name_service import NameService
from rns_dashboard.services.nft_service import NftService
from rns_dashboard.services.token_service import TokenService
from rns_dashboard.services.transaction_service import TransactionService

TEST_ADDRESS = "0x1234567890abcdef1234567890abcdef12345678"
RESOLVER_ADDRESS = "0x99a12be4c89cbf6cfd11d1f2c029904a7b644368"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@pytest.fixture
def aggregation_config():
    """Aggregation limits with their default values."""
    return AggregationConfig()


@pytest.fixture
def rootstock_config():
    """Rootstock configuration with the default public nodes and registries."""
    return RootstockConfig()


@pytest.fixture
def mock_alchemy_client():
    """Create a mock Alchemy client."""
    client = AsyncMock(spec=AlchemyClient)
    
    # Common mock responses
    client.get_token_balances.return_value = {"address": TEST_ADDRESS, "tokenBalances": []}
    client.get_token_metadata.return_value = {"name": "Test Token", "symbol": "TEST", "decimals": 18}
    client.get_nfts_for_owner.return_value = {"ownedNfts": [], "totalCount": 0}
    client.get_contract_metadata.return_value = {}
    client.get_asset_transfers.return_value = {"transfers": []}
    client.raw_request.return_value = {}
    return client


@pytest.fixture
def mock_coingecko_client():
    """Create a mock CoinGecko client that knows no tokens."""
    client = AsyncMock(spec=CoinGeckoClient)
    client.get_token_by_contract_address.return_value = None
    return client


@pytest.fixture
def mock_rootstock_client():
    """Create a mock Rootstock node client."""
    client = AsyncMock(spec=RootstockClient)
    client.get_balance.return_value = 1500000000000000000  # 1.5 RBTC in wei
    client.get_resolver.return_value = RESOLVER_ADDRESS
    client.get_addr.return_value = TEST_ADDRESS
    client.get_erc20_balance.return_value = {
        "raw": 2500000000000000000,
        "symbol": "RIF",
        "name": "RIF",
        "decimals": 18,
    }
    return client


@pytest.fixture
def alchemy_factory(mock_alchemy_client):
    """Client factory returning the mock Alchemy client for every network."""
    def factory(network):
        return mock_alchemy_client
    return factory


@pytest.fixture
def rootstock_factory(mock_rootstock_client):
    """Client factory returning the mock Rootstock client for every network."""
    def factory(network):
        return mock_rootstock_client
    return factory


@pytest.fixture
def name_service(rootstock_factory, rootstock_config):
    """Create a NameService instance with mocked dependencies."""
    return NameService(client_factory=rootstock_factory, config=rootstock_config)


@pytest.fixture
def balance_service(rootstock_factory):
    """Create a BalanceService instance with mocked dependencies."""
    return BalanceService(client_factory=rootstock_factory)


@pytest.fixture
def token_service(alchemy_factory, mock_coingecko_client, aggregation_config):
    """Create a TokenService instance with mocked dependencies."""
    return TokenService(
        alchemy_factory=alchemy_factory,
        coingecko_client=mock_coingecko_client,
        config=aggregation_config
    )


@pytest.fixture
def nft_service(alchemy_factory, aggregation_config):
    """Create an NftService instance with mocked dependencies."""
    return NftService(alchemy_factory=alchemy_factory, config=aggregation_config)


@pytest.fixture
def transaction_service(alchemy_factory, aggregation_config):
    """Create a TransactionService instance with mocked dependencies."""
    return TransactionService(alchemy_factory=alchemy_factory, config=aggregation_config)


@pytest.fixture
def dashboard_service(name_service, balance_service, token_service, nft_service, transaction_service):
    """Create a DashboardService wired to the mocked services."""
    return DashboardService(
        name_service=name_service,
        balance_service=balance_service,
        token_service=token_service,
        nft_service=nft_service,
        transaction_service=transaction_service
    )


@pytest.fixture
def sample_transfers():
    """Sample transfers as returned by `alchemy_getAssetTransfers`."""
    return [
        {
            "blockNum": "0x10",
            "hash": "0xaaa",
            "from": TEST_ADDRESS,
            "to": "0x2222222222222222222222222222222222222222",
            "value": 1.5,
            "asset": "RBTC",
            "category": "external",
        },
        {
            "blockNum": "0x20",
            "hash": "0xbbb",
            "from": "0x3333333333333333333333333333333333333333",
            "to": TEST_ADDRESS,
            "value": 10,
            "asset": "RIF",
            "category": "erc20",
        },
    ]
