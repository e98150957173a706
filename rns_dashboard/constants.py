"""Constants for the RNS dashboard."""

# Fixed registration price of a .rsk name on mainnet, in RIF per year
RIF_PRICE_PER_YEAR = "2"

# Small curated ERC-20 list read directly from the node for each network
CURATED_TOKENS = {
    "mainnet": [
        # RIF
        {"address": "0x2acc95758f8b5f583470ba265eb685a8f45fc9d5", "coingecko_id": "rif-token"},
        # RDOC (Money on Chain Dollar on RSK)
        {"address": "0x2b2e4a6a2038d6cd3c38f41f5aabf638a722f6a5", "coingecko_id": "rdoc"},
    ],
    "testnet": [
        # tRIF
        {"address": "0x19f64674d8a5b4e652319f5e239efd3bc969a1fe", "coingecko_id": "trif-token"},
    ],
}

# Transfer categories requested from the transfer-history endpoint
TRANSFER_CATEGORIES = ["external", "erc20", "erc721", "erc1155"]

# Native currency decimals (RBTC uses 18 like ether)
NATIVE_DECIMALS = 18
