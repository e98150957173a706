"""Clients for the remote data sources used by the dashboard."""

from rns_dashboard.clients.alchemy_client import AlchemyClient
from rns_dashboard.clients.base_client import BaseRpcClient, rpc_call
from rns_dashboard.clients.coingecko_client import CoinGeckoClient
from rns_dashboard.clients.rootstock_client import RootstockClient

__all__ = [
    "AlchemyClient",
    "BaseRpcClient",
    "CoinGeckoClient",
    "RootstockClient",
    "rpc_call",
]
