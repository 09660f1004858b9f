"""Tests for restyle loop detection."""

from unittest.mock import Mock

import pytest

from retint.core import LoopGuard


@pytest.fixture
def on_loop():
    return Mock()


@pytest.fixture
def guard(clock, on_loop):
    return LoopGuard(clock=clock, on_loop=on_loop)


@pytest.mark.unit
class TestLoopGuard:
    """Test the per-node mutation rate limit."""

    def test_fifth_rapid_mutation_is_skipped(self, guard, clock):
        decisions = []
        for _ in range(5):
            decisions.append(guard.should_skip(7))
            clock.advance(100)

        assert decisions == [False, False, False, False, True]
        assert guard.cycles(7) == 4

    def test_quiet_period_resets(self, guard, clock):
        for _ in range(5):
            guard.should_skip(7)
            clock.advance(100)

        clock.advance(500)
        assert guard.should_skip(7) is False
        assert guard.cycles(7) == 0

    def test_continued_rapid_mutations_stay_skipped(self, guard, clock):
        for _ in range(5):
            guard.should_skip(7)
            clock.advance(100)

        assert all(guard.should_skip(7) for _ in range(10))

    def test_slow_mutations_never_skip(self, guard, clock):
        for _ in range(20):
            assert guard.should_skip(7) is False
            clock.advance(500)

    def test_nodes_are_tracked_separately(self, guard, clock):
        for _ in range(5):
            guard.should_skip(1)
            clock.advance(10)

        assert guard.should_skip(2) is False
        assert len(guard) == 2

    def test_warning_is_rate_limited(self, guard, clock, on_loop, caplog):
        for _ in range(5):
            guard.should_skip(7)
            clock.advance(100)
        on_loop.assert_called_once_with(7)

        # Still looping 4.9 s later: no new warning
        for _ in range(49):
            guard.should_skip(7)
            clock.advance(100)
        assert on_loop.call_count == 1

        for _ in range(2):
            guard.should_skip(7)
            clock.advance(100)
        assert on_loop.call_count == 2
        assert "Style loop detected on node 7" in caplog.text

    def test_forget_and_clear(self, guard, clock):
        guard.should_skip(1)
        guard.should_skip(2)
        assert 1 in guard

        guard.forget(1)
        assert 1 not in guard

        guard.clear()
        assert len(guard) == 0

    def test_custom_limits(self, clock):
        guard = LoopGuard(clock=clock, window_ms=50, max_cycles=1)

        assert guard.should_skip(1) is False
        clock.advance(10)
        assert guard.should_skip(1) is True
