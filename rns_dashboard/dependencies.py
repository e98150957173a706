"""
Dependency injection and service provider management for the RNS dashboard API.

Services are stateless apart from their client factories, so one instance of
each is registered at startup and shared by all requests. Network clients are
built per request inside the services, after the input has been validated.
"""

import logging
from functools import lru_cache
from typing import Dict, Optional, Type, TypeVar

from rns_dashboard.clients.coingecko_client import CoinGeckoClient
from rns_dashboard.services.balance_service import BalanceService
from rns_dashboard.services.base_service import BaseService
from rns_dashboard.services.dashboard_service import DashboardService
from rns_dashboard.services.name_service import NameService
from rns_dashboard.services.nft_service import NftService
from rns_dashboard.services.token_service import TokenService
from rns_dashboard.services.transaction_service import TransactionService

# Type variable for service classes
T = TypeVar('T', bound=BaseService)

# Global registry of service instances
_SERVICE_REGISTRY: Dict[Type[BaseService], BaseService] = {}

# Shared CoinGecko client, closed on shutdown
_coingecko_client: Optional[CoinGeckoClient] = None


def initialize_providers():
    """
    Initialize all service providers when the application starts.
    """
    global _coingecko_client
    logging.info("Initializing service providers")
    
    _coingecko_client = CoinGeckoClient()
    
    name_service = NameService()
    balance_service = BalanceService()
    token_service = TokenService(coingecko_client=_coingecko_client)
    nft_service = NftService()
    transaction_service = TransactionService()
    
    register_service(NameService, name_service)
    register_service(BalanceService, balance_service)
    register_service(TokenService, token_service)
    register_service(NftService, nft_service)
    register_service(TransactionService, transaction_service)
    register_service(
        DashboardService,
        DashboardService(
            name_service=name_service,
            balance_service=balance_service,
            token_service=token_service,
            nft_service=nft_service,
            transaction_service=transaction_service
        )
    )
    
    logging.info("Service providers initialized successfully")


async def shutdown_providers():
    """Release shared clients and forget registered services."""
    global _coingecko_client
    if _coingecko_client is not None:
        await _coingecko_client.close()
        _coingecko_client = None
    _SERVICE_REGISTRY.clear()
    for provider in (get_name_service, get_balance_service, get_token_service,
                     get_nft_service, get_transaction_service, get_dashboard_service):
        provider.cache_clear()


def register_service(service_type: Type[T], service_instance: T):
    """
    Register a service instance with the dependency injection system.
    
    Args:
        service_type: The service class type
        service_instance: The instance of the service to register
    """
    _SERVICE_REGISTRY[service_type] = service_instance
    logging.debug(f"Registered service: {service_type.__name__}")


def get_service(service_type: Type[T]) -> T:
    """
    Get a service instance by its type, initializing providers on first use.
    
    Raises:
        KeyError: If the service is not registered
    """
    if not _SERVICE_REGISTRY:
        initialize_providers()
    if service_type not in _SERVICE_REGISTRY:
        raise KeyError(f"Service not registered: {service_type.__name__}")
    return _SERVICE_REGISTRY[service_type]


# FastAPI dependency providers
@lru_cache
def get_name_service() -> NameService:
    """Dependency provider for NameService."""
    return get_service(NameService)


@lru_cache
def get_balance_service() -> BalanceService:
    """Dependency provider for BalanceService."""
    return get_service(BalanceService)


@lru_cache
def get_token_service() -> TokenService:
    """Dependency provider for TokenService."""
    return get_service(TokenService)


@lru_cache
def get_nft_service() -> NftService:
    """Dependency provider for NftService."""
    return get_service(NftService)


@lru_cache
def get_transaction_service() -> TransactionService:
    """Dependency provider for TransactionService."""
    return get_service(TransactionService)


@lru_cache
def get_dashboard_service() -> DashboardService:
    """Dependency provider for DashboardService."""
    return get_service(DashboardService)
