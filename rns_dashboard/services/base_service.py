"""
Base service class for RNS dashboard services.

This module provides a base class for all services, with common
functionality for ordered fallbacks, batching and timing logs.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

from rns_dashboard.utils.batching import batch_process_requests
from rns_dashboard.utils.errors import RnsDashboardError, RpcError, UpstreamError

T = TypeVar('T')
R = TypeVar('R')

# A named zero-argument coroutine factory
Strategy = Tuple[str, Callable[[], Awaitable[T]]]

# Configure logger
logger = logging.getLogger(__name__)


class BaseService:
    """
    Base service class with common functionality.
    
    This class provides:
    - Ordered fallback strategies
    - Bounded batching
    - Timing logs
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the base service.
        
        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(self.__class__.__name__)
    
    async def try_strategies(self, strategies: Sequence[Strategy], operation_name: str) -> Any:
        """
        Run strategies in order and return the first successful result.
        
        Each failure moves on to the next strategy. When every strategy
        fails, the last failure is raised unchanged.
        
        Args:
            strategies: (name, coroutine factory) pairs, primary first
            operation_name: Name of the operation for logging
            
        Returns:
            Result of the first strategy that succeeds
        """
        if not strategies:
            raise ValueError("At least one strategy is required")
        
        last_exception: Optional[Exception] = None
        for index, (name, strategy) in enumerate(strategies):
            try:
                return await strategy()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                last_exception = e
                if index < len(strategies) - 1:
                    self.logger.warning(
                        f"{operation_name} via {name} failed, trying next strategy: {str(e)}"
                    )
                else:
                    self.logger.error(f"{operation_name} via {name} failed: {str(e)}")
        
        raise last_exception
    
    async def fetch_with_fallback(self, strategies: Sequence[Strategy], operation_name: str) -> Any:
        """
        Like `try_strategies`, but report the final failure as an upstream error.
        
        Raises:
            UpstreamError: If every strategy fails with a non-dashboard error
        """
        try:
            return await self.try_strategies(strategies, operation_name)
        except RpcError as e:
            raise UpstreamError(
                e.message,
                service_name=self.__class__.__name__,
                details={"error_data": e.error_data}
            ) from e
        except RnsDashboardError:
            raise
        except Exception as e:
            raise UpstreamError(
                str(e) or f"{operation_name} failed",
                service_name=self.__class__.__name__
            ) from e
    
    async def gather_in_batches(
        self,
        processor: Callable[[T], Awaitable[R]],
        items: List[T],
        batch_size: int
    ) -> List[Optional[R]]:
        """
        Process items in fixed-size concurrent batches; failures yield None.
        """
        return await batch_process_requests(processor, items, batch_size=batch_size)
    
    def log_timing(self, operation_name: str) -> "TimingContextManager":
        """
        Create a context manager to log timing information.
        
        Args:
            operation_name: Name of the operation
            
        Returns:
            Timing context manager
        """
        return TimingContextManager(operation_name, self.logger)


class TimingContextManager:
    """Context manager to log timing information."""
    
    def __init__(self, operation_name: str, logger: logging.Logger):
        self.operation_name = operation_name
        self.logger = logger
        self.start_time = 0.0
    
    async def __aenter__(self) -> "TimingContextManager":
        self.start_time = time.time()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = time.time() - self.start_time
        if exc_val is not None:
            self.logger.error(
                f"{self.operation_name} failed after {elapsed:.2f}s: {str(exc_val)}"
            )
        else:
            self.logger.info(f"{self.operation_name} completed in {elapsed:.2f}s")
