"""
Error handling utilities for the RNS dashboard.

This module defines the exception hierarchy shared by clients, services
and API routes. Every error carries the HTTP status it maps to.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ErrorCode(str, Enum):
    """Error codes for the RNS dashboard API."""
    
    # General errors
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    
    # Upstream errors
    RPC_ERROR = "RPC_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    
    # Name resolution errors
    NOT_REGISTERED = "NOT_REGISTERED"
    NO_ADDRESS_SET = "NO_ADDRESS_SET"


class RnsDashboardError(Exception):
    """Base exception for all RNS dashboard errors."""
    
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize a new RNS dashboard error.
        
        Args:
            message: Error message
            code: Error code
            status_code: HTTP status code
            details: Additional error details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(RnsDashboardError):
    """Exception for bad or missing request input."""
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class ConfigurationError(RnsDashboardError):
    """Exception raised when a required endpoint or key is not configured."""
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIGURATION_ERROR,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )


class RpcError(RnsDashboardError):
    """Exception raised when a JSON-RPC endpoint returns an error payload."""
    
    def __init__(
        self,
        message: str,
        error_data: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code=ErrorCode.RPC_ERROR,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"error_data": error_data or {}}
        )
        self.error_data = error_data or {}


class UpstreamError(RnsDashboardError):
    """Exception for a provider or contract call that failed after fallback."""
    
    def __init__(
        self,
        message: str,
        service_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if service_name:
            error_details["service_name"] = service_name
            
        super().__init__(
            message=message,
            code=ErrorCode.UPSTREAM_ERROR,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=error_details
        )


class NotRegisteredError(RnsDashboardError):
    """Exception raised when a name has no resolver in the registry."""
    
    def __init__(self, name: str):
        super().__init__(
            message=f"Name not registered: {name}",
            code=ErrorCode.NOT_REGISTERED,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"name": name}
        )
        self.name = name


class NoAddressSetError(RnsDashboardError):
    """Exception raised when a registered name resolves to the zero address."""
    
    def __init__(self, name: str):
        super().__init__(
            message=f"No address set for name: {name}",
            code=ErrorCode.NO_ADDRESS_SET,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"name": name}
        )
        self.name = name
