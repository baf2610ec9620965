"""
Unit tests for RequestStateTracker.
"""

import pytest

from inventory_client.errors import internal_error
from inventory_client.stores.request_state import RequestKey, RequestStateTracker, RequestStatus


@pytest.fixture
def tracker(clock):
    return RequestStateTracker(clock=clock, sleep=clock.sleep)


class TestRequestStateTracker:
    """Tests for RequestStateTracker."""

    def test_initial_state(self, tracker):
        """Test every declared key starts idle."""
        for key in RequestKey:
            state = tracker.get(key)
            assert state.status == RequestStatus.IDLE
            assert state.error is None

    def test_unknown_key(self, tracker):
        """Test unknown keys raise KeyError."""
        with pytest.raises(KeyError):
            tracker.get("unknownRequest")

    def test_string_keys(self, tracker):
        """Test keys can be given by their string value."""
        assert tracker.state("tableFetchRequest") is tracker.state(RequestKey.TABLE_FETCH)

    @pytest.mark.asyncio
    async def test_loading_cycle(self, tracker, clock):
        """Test start and end loading without a minimum duration."""
        await tracker.start_loading(RequestKey.LICENSE_FETCH)
        assert tracker.get(RequestKey.LICENSE_FETCH).loading
        await tracker.end_loading(RequestKey.LICENSE_FETCH)
        assert tracker.get(RequestKey.LICENSE_FETCH).status == RequestStatus.SUCCESS
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_minimum_duration_holds_loading(self, tracker, clock):
        """Test loading is held until the minimum elapsed since start."""
        seen = []
        tracker.state(RequestKey.APPLICATION_FETCH).subscribe(lambda state: seen.append(state.status))

        await tracker.start_loading(RequestKey.APPLICATION_FETCH)
        clock.now += 0.25
        await tracker.end_loading(RequestKey.APPLICATION_FETCH, 1000)

        assert clock.sleeps == [pytest.approx(0.75)]
        assert seen[-2:] == [RequestStatus.LOADING, RequestStatus.SUCCESS]

    @pytest.mark.asyncio
    async def test_minimum_from_start_loading(self, tracker, clock):
        """Test a minimum given to start_loading applies at end_loading."""
        await tracker.start_loading(RequestKey.USER_POST, 500)
        await tracker.end_loading(RequestKey.USER_POST)
        assert clock.sleeps == [pytest.approx(0.5)]

    @pytest.mark.asyncio
    async def test_slow_request_is_not_delayed(self, tracker, clock):
        """Test no sleep happens once the minimum already passed."""
        await tracker.start_loading(RequestKey.APPLICATION_FETCH)
        clock.now += 2
        await tracker.end_loading(RequestKey.APPLICATION_FETCH, 1000)
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_error_survives_end_loading(self, tracker):
        """Test a recorded error keeps the error status after loading ends."""
        await tracker.start_loading(RequestKey.TABLE_FETCH)
        tracker.set_error(RequestKey.TABLE_FETCH, internal_error("Failed to fetch licenses."))
        await tracker.end_loading(RequestKey.TABLE_FETCH)

        state = tracker.get(RequestKey.TABLE_FETCH)
        assert state.status == RequestStatus.ERROR
        assert state.error.message == "Failed to fetch licenses."

    def test_clear_error(self, tracker):
        """Test set_error(None) clears the last failure."""
        tracker.set_error(RequestKey.LICENSE_FETCH, internal_error("boom"))
        tracker.set_error(RequestKey.LICENSE_FETCH, None)
        state = tracker.get(RequestKey.LICENSE_FETCH)
        assert state.error is None
        assert state.status == RequestStatus.IDLE

    @pytest.mark.asyncio
    async def test_mutation_disables_buttons(self, tracker):
        """Test buttons are disabled only while a mutation runs."""
        async with tracker.mutation():
            assert tracker.buttons_disabled.get() is True
        assert tracker.buttons_disabled.get() is False
