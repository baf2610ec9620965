"""
Unit tests for CloseTransition.
"""

import asyncio

import pytest

from inventory_client.stores.close import CloseTransition


def test_complete_resets_once():
    """Test complete() runs the reset a single time."""
    calls = []
    transition = CloseTransition(lambda: calls.append(1))
    assert transition.done is False

    transition.complete()
    transition.complete()

    assert calls == [1]
    assert transition.done is True


def test_without_loop_waits_for_complete():
    """Test no fallback is scheduled outside an event loop."""
    calls = []
    CloseTransition(lambda: calls.append(1))
    assert calls == []


@pytest.mark.asyncio
async def test_fallback_resets():
    """Test the reset happens after the fallback delay."""
    calls = []
    transition = CloseTransition(lambda: calls.append(1), fallback_ms=10)

    await asyncio.sleep(0.05)

    assert calls == [1]
    assert transition.done is True


@pytest.mark.asyncio
async def test_complete_cancels_fallback():
    """Test an explicit completion prevents a second reset."""
    calls = []
    transition = CloseTransition(lambda: calls.append(1), fallback_ms=10)
    transition.complete()

    await asyncio.sleep(0.05)

    assert calls == [1]


@pytest.mark.asyncio
async def test_cancel_drops_reset():
    """Test a cancelled transition never resets."""
    calls = []
    transition = CloseTransition(lambda: calls.append(1), fallback_ms=10)
    transition.cancel()
    transition.complete()

    await asyncio.sleep(0.05)

    assert calls == []
    assert transition.done is True
