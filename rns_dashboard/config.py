"""Configuration module for the RNS dashboard server."""

# Standard library imports
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

# Third-party library imports
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

NETWORKS = ("mainnet", "testnet")

DEFAULT_ALCHEMY_HOSTS = {
    "mainnet": "https://rootstock-mainnet.g.alchemy.com/v2/",
    "testnet": "https://rootstock-testnet.g.alchemy.com/v2/",
}


def get_env_var(key: str, default: Any = None, required: bool = False,
               validator: Optional[callable] = None) -> Any:
    """Get and validate environment variable.
    
    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ValueError when not found
        validator: Optional validation function
        
    Returns:
        The environment variable value or default
        
    Raises:
        ValueError: If required and not found, or fails validation
    """
    value = os.environ.get(key)
    
    if value is None or value == "":
        if required:
            raise ValueError(f"Required environment variable '{key}' not found")
        return default
    
    if validator:
        try:
            return validator(value)
        except Exception as e:
            raise ValueError(f"Invalid value for environment variable '{key}': {str(e)}")
    
    return value


def bool_validator(value: str) -> bool:
    """Validate and convert string to boolean."""
    return value.lower() in ("true", "1", "yes", "y", "on")


def int_validator(value: str) -> int:
    """Validate and convert string to integer.
    
    Raises:
        ValueError: If not a valid integer
    """
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")


def positive_int_validator(value: str) -> int:
    """Validate and convert string to a strictly positive integer."""
    number = int_validator(value)
    if number <= 0:
        raise ValueError(f"'{value}' must be greater than zero")
    return number


def url_validator(value: str) -> str:
    """Validate URL format.
    
    Args:
        value: URL to validate
        
    Returns:
        The validated URL
        
    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)
    
    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value


def log_level_validator(value: str) -> str:
    """Validate log level.
    
    Raises:
        ValueError: If not a valid log level
    """
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


def environment_validator(value: str) -> str:
    """Validate environment name.
    
    Raises:
        ValueError: If not a valid environment name
    """
    valid_environments = ("development", "testing", "staging", "production")
    if value.lower() not in valid_environments:
        raise ValueError(f"Environment must be one of: {', '.join(valid_environments)}")
    return value.lower()


@dataclass
class RootstockConfig:
    """Configuration for the Rootstock node connection and RNS registry."""
    
    mainnet_rpc_url: str = "https://public-node.rsk.co"
    testnet_rpc_url: str = "https://public-node.testnet.rsk.co"
    mainnet_registry: str = "0xcb868aeabd31e2b66f74e9a55cf064abb31a4ad5"
    testnet_registry: str = "0x7d284aaac6e925aad802a53c0c69efe3764597b8"
    timeout: int = 30  # seconds
    
    def rpc_url(self, network: str) -> str:
        """Get the node URL for a network."""
        return self.mainnet_rpc_url if network == "mainnet" else self.testnet_rpc_url
    
    def registry_address(self, network: str) -> str:
        """Get the RNS registry contract address for a network."""
        return self.mainnet_registry if network == "mainnet" else self.testnet_registry


@lru_cache()
def get_rootstock_config() -> RootstockConfig:
    """Get Rootstock configuration from environment variables.
    
    Returns:
        RootstockConfig instance
        
    Raises:
        ValueError: If environment variables fail validation
    """
    return RootstockConfig(
        mainnet_rpc_url=get_env_var("RSK_RPC_URL_MAINNET", "https://public-node.rsk.co",
                                    validator=url_validator),
        testnet_rpc_url=get_env_var("RSK_RPC_URL_TESTNET", "https://public-node.testnet.rsk.co",
                                    validator=url_validator),
        mainnet_registry=get_env_var("RNS_REGISTRY_MAINNET", "0xcb868aeabd31e2b66f74e9a55cf064abb31a4ad5"),
        testnet_registry=get_env_var("RNS_REGISTRY_TESTNET", "0x7d284aaac6e925aad802a53c0c69efe3764597b8"),
        timeout=get_env_var("REQUEST_TIMEOUT", 30, validator=positive_int_validator),
    )


@dataclass
class AlchemyConfig:
    """Configuration for the Alchemy blockchain-data API."""
    
    mainnet_url: Optional[str] = None
    testnet_url: Optional[str] = None
    api_key: Optional[str] = None
    mainnet_host: str = DEFAULT_ALCHEMY_HOSTS["mainnet"]
    testnet_host: str = DEFAULT_ALCHEMY_HOSTS["testnet"]
    timeout: int = 30  # seconds
    
    def url_for(self, network: str) -> Optional[str]:
        """Get the Alchemy endpoint URL for a network.
        
        An explicit full URL wins over a host + API key combination.
        
        Returns:
            The endpoint URL, or None when nothing is configured
        """
        explicit = self.mainnet_url if network == "mainnet" else self.testnet_url
        if explicit:
            return explicit
        if self.api_key:
            host = self.mainnet_host if network == "mainnet" else self.testnet_host
            return host + self.api_key
        return None


@lru_cache()
def get_alchemy_config() -> AlchemyConfig:
    """Get Alchemy configuration from environment variables.
    
    Both the ALCHEMY_RSK_* and ROOTSTOCK_* variable names are accepted.
    """
    return AlchemyConfig(
        mainnet_url=(get_env_var("ALCHEMY_RSK_MAINNET_URL")
                     or get_env_var("ROOTSTOCK_MAINNET_ALCHEMY_NETWORK_URL")),
        testnet_url=(get_env_var("ALCHEMY_RSK_TESTNET_URL")
                     or get_env_var("ROOTSTOCK_TESTNET_ALCHEMY_NETWORK_URL")),
        api_key=get_env_var("ALCHEMY_API_KEY"),
        mainnet_host=get_env_var("ALCHEMY_RSK_MAINNET_HOST", DEFAULT_ALCHEMY_HOSTS["mainnet"]),
        testnet_host=get_env_var("ALCHEMY_RSK_TESTNET_HOST", DEFAULT_ALCHEMY_HOSTS["testnet"]),
        timeout=get_env_var("REQUEST_TIMEOUT", 30, validator=positive_int_validator),
    )


@dataclass
class CoinGeckoConfig:
    """Configuration for the CoinGecko public API."""
    
    base_url: str = "https://api.coingecko.com/api/v3"
    api_key: Optional[str] = None
    platform: str = "rootstock"
    timeout: int = 30  # seconds


@lru_cache()
def get_coingecko_config() -> CoinGeckoConfig:
    """Get CoinGecko configuration from environment variables."""
    return CoinGeckoConfig(
        base_url=get_env_var("COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3",
                             validator=url_validator),
        api_key=get_env_var("COINGECKO_API_KEY"),
        platform=get_env_var("COINGECKO_PLATFORM", "rootstock"),
        timeout=get_env_var("REQUEST_TIMEOUT", 30, validator=positive_int_validator),
    )


@dataclass
class AggregationConfig:
    """Batch sizes and limits used by the aggregators.
    
    The batch sizes bound the number of concurrent requests sent to the
    upstream providers and reflect their rate limits.
    """
    token_metadata_batch_size: int = 8
    coingecko_batch_size: int = 5
    nft_metadata_batch_size: int = 6
    nft_page_size: int = 100
    nft_max_pages: int = 5
    transaction_limit: int = 20


@lru_cache()
def get_aggregation_config() -> AggregationConfig:
    """Get aggregation configuration from environment variables."""
    return AggregationConfig(
        token_metadata_batch_size=get_env_var("TOKEN_METADATA_BATCH_SIZE", 8, validator=positive_int_validator),
        coingecko_batch_size=get_env_var("COINGECKO_BATCH_SIZE", 5, validator=positive_int_validator),
        nft_metadata_batch_size=get_env_var("NFT_METADATA_BATCH_SIZE", 6, validator=positive_int_validator),
        nft_page_size=get_env_var("NFT_PAGE_SIZE", 100, validator=positive_int_validator),
        nft_max_pages=get_env_var("NFT_MAX_PAGES", 5, validator=positive_int_validator),
        transaction_limit=get_env_var("TRANSACTION_LIMIT", 20, validator=positive_int_validator),
    )


@dataclass
class ServerConfig:
    """Configuration for the server."""
    
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.environment not in ("development", "testing", "staging", "production"):
            raise ValueError(f"Invalid environment: {self.environment}")
        
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level: {self.log_level}")


@lru_cache()
def get_server_config() -> ServerConfig:
    """Get server configuration from environment variables.
    
    Returns:
        ServerConfig instance
        
    Raises:
        ValueError: If environment variables fail validation
    """
    return ServerConfig(
        host=get_env_var("HOST", "0.0.0.0"),
        port=get_env_var("PORT", 8000, validator=int_validator),
        debug=get_env_var("DEBUG", False, validator=bool_validator),
        environment=get_env_var("ENVIRONMENT", "development", validator=environment_validator),
        log_level=get_env_var("LOG_LEVEL", "INFO", validator=log_level_validator),
    )
