"""Unit tests for the pending OAuth state store."""

import pytest

from diary.adapter.error import InvalidProviderToken
from diary.adapter.google.client import RealGoogleOAuthClient
from diary.adapter.state import PendingStates


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestPendingStates:
    """Tests for PendingStates."""

    def test_fresh_state_is_consumed_once(self):
        states = PendingStates(clock=FakeClock())
        states.add("s1")

        assert states.consume("s1")
        assert not states.consume("s1")

    def test_expired_state_is_rejected(self):
        clock = FakeClock()
        states = PendingStates(ttl=60, clock=clock)
        states.add("s1")

        clock.now += 61

        assert not states.consume("s1")

    def test_expired_states_are_pruned_on_add(self):
        """Abandoned states do not pile up."""
        # Arrange
        clock = FakeClock()
        states = PendingStates(ttl=60, clock=clock)
        for i in range(100):
            states.add(f"abandoned-{i}")

        # Act
        clock.now += 61
        states.add("fresh")

        # Assert
        assert len(states) == 1
        assert states.consume("fresh")


class TestGoogleClientStates:
    """The Google client only accepts states it issued."""

    @pytest.mark.asyncio
    async def test_unknown_state_is_rejected_before_any_request(self):
        client = RealGoogleOAuthClient("client-id", "secret", "http://testserver/cb")

        with pytest.raises(InvalidProviderToken):
            await client.complete_authorization("code", "never-issued")

    @pytest.mark.asyncio
    async def test_initiate_prunes_abandoned_states(self):
        # Arrange
        clock = FakeClock()
        client = RealGoogleOAuthClient("client-id", "secret", "http://testserver/cb")
        client._states = PendingStates(ttl=60, clock=clock)
        await client.initiate_authorization("abandoned")

        # Act
        clock.now += 61
        await client.initiate_authorization("fresh")

        # Assert
        assert len(client._states) == 1
