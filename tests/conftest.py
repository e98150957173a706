"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    aggregation_config,
    rootstock_config,
    mock_alchemy_client,
    mock_coingecko_client,
    mock_rootstock_client,
    alchemy_factory,
    rootstock_factory,
    name_service,
    balance_service,
    token_service,
    nft_service,
    transaction_service,
    dashboard_service,
    sample_transfers,
)
