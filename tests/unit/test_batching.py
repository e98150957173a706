"""Unit tests for bounded batching."""

import asyncio

import pytest

from rns_dashboard.utils.batching import batch_process_requests, chunked


def test_chunked():
    assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunked([], 3) == []
    with pytest.raises(ValueError):
        chunked([1], 0)


@pytest.mark.asyncio
async def test_results_keep_input_order():
    """Test that results line up with their items even when they finish out of order."""
    # Setup
    async def processor(item):
        await asyncio.sleep(0.01 * (5 - item))
        return item * 10

    # Execute
    results = await batch_process_requests(processor, [1, 2, 3, 4], batch_size=3)

    # Verify
    assert results == [10, 20, 30, 40]


@pytest.mark.asyncio
async def test_failures_become_none():
    """Test that one failing item does not affect its siblings."""
    # Setup
    async def processor(item):
        if item == "bad":
            raise RuntimeError("boom")
        return item.upper()

    # Execute
    results = await batch_process_requests(processor, ["a", "bad", "c"], batch_size=8)

    # Verify
    assert results == ["A", None, "C"]


@pytest.mark.asyncio
async def test_concurrency_is_bounded_by_batch_size():
    """Test that no more than batch_size items are in flight at once."""
    # Setup
    in_flight = 0
    peak = 0

    async def processor(item):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return item

    # Execute
    results = await batch_process_requests(processor, list(range(20)), batch_size=6)

    # Verify
    assert results == list(range(20))
    assert peak == 6


@pytest.mark.asyncio
async def test_empty_input():
    async def processor(item):
        return item

    assert await batch_process_requests(processor, [], batch_size=5) == []
