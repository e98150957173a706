"""Batching utilities for the RNS dashboard.

Upstream providers are rate limited, so per-item lookups are issued in fixed-size
groups: every item of a group runs concurrently and the next group starts only
when the previous one has finished.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

# Type variables for generic types
T = TypeVar('T')  # Input type
R = TypeVar('R')  # Result type

logger = logging.getLogger(__name__)


def chunked(items: List[T], size: int) -> List[List[T]]:
    """Split a list into consecutive chunks of at most `size` items."""
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    return [items[i:i + size] for i in range(0, len(items), size)]


async def batch_process_requests(
    processor: Callable[[T], Awaitable[R]],
    items: List[T],
    batch_size: int = 10
) -> List[Optional[R]]:
    """
    Process a list of items in batches, failing soft per item.
    
    Args:
        processor: Async function to process each item
        items: List of items to process
        batch_size: Maximum number of items processed concurrently
        
    Returns:
        List of results in the same order as the input items, with None in
        place of every item whose processor raised
    """
    results: List[Optional[R]] = []
    
    for batch in chunked(items, batch_size):
        batch_results = await asyncio.gather(
            *[processor(item) for item in batch],
            return_exceptions=True
        )
        for item, result in zip(batch, batch_results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                logger.debug(f"Batch item {item!r} failed: {result}")
                results.append(None)
            else:
                results.append(result)
    
    return results
