"""Tests for the per-provider tenacity retry policy."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from offerdesk.resilience.retry import MAX_DELAY_SECONDS, provider_retrying


class TestProviderRetrying:
    """Retrying controller built by provider_retrying."""

    def test_succeeds_after_failures_with_increasing_sleeps(self) -> None:
        sleeps: list[float] = []
        fn = MagicMock(side_effect=[ConnectionError("down"), TimeoutError("slow"), "ok"])

        retrying = provider_retrying("stub", max_attempts=3, base_delay=1.0, sleep=sleeps.append)
        result = retrying(fn, "arg")

        assert result == "ok"
        assert fn.call_count == 3
        assert sleeps == [1.0, 2.0]
        assert sleeps[0] < sleeps[1]

    def test_reraises_last_error_after_exhaustion(self) -> None:
        sleeps: list[float] = []
        fn = MagicMock(side_effect=ValueError("bad json"))

        retrying = provider_retrying("stub", max_attempts=2, base_delay=0.5, sleep=sleeps.append)

        with pytest.raises(ValueError, match="bad json"):
            retrying(fn)

        assert fn.call_count == 2
        assert sleeps == [0.5]

    def test_single_attempt_never_sleeps(self) -> None:
        sleeps: list[float] = []
        fn = MagicMock(side_effect=RuntimeError("nope"))

        retrying = provider_retrying("stub", max_attempts=1, sleep=sleeps.append)

        with pytest.raises(RuntimeError):
            retrying(fn)

        assert sleeps == []

    def test_delays_double_then_hold_at_max_delay(self) -> None:
        sleeps: list[float] = []
        fn = MagicMock(side_effect=ConnectionError("down"))

        retrying = provider_retrying(
            "stub", max_attempts=5, base_delay=1.0, max_delay=3.0, sleep=sleeps.append
        )

        with pytest.raises(ConnectionError):
            retrying(fn)

        assert sleeps == [1.0, 2.0, 3.0, 3.0]

    def test_default_cap_reached_on_sixth_failure(self) -> None:
        sleeps: list[float] = []
        fn = MagicMock(side_effect=ConnectionError("down"))

        retrying = provider_retrying("stub", max_attempts=8, base_delay=1.0, sleep=sleeps.append)

        with pytest.raises(ConnectionError):
            retrying(fn)

        assert sleeps == [1.0, 2.0, 4.0, 8.0, 16.0, MAX_DELAY_SECONDS, MAX_DELAY_SECONDS]
