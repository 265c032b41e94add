"""Tenacity retry policy for completion-provider calls.

Each provider gets a fixed attempt budget with exponential backoff (the base
delay doubles after every failed attempt).  Delays carry no jitter, so they are
strictly increasing until they reach ``max_delay``; every later delay equals
the cap.  With the defaults (1s base, 30s cap) that happens from the sixth
failure on.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog
from tenacity import (
    RetryCallState,
    Retrying,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger()

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY_SECONDS = 1.0
MAX_DELAY_SECONDS = 30.0


def _before_sleep_log(provider_name: str) -> Callable[[RetryCallState], None]:
    """Build a ``before_sleep`` hook that logs the failed attempt.

    Args:
        provider_name: Provider label used in log output.

    Returns:
        A hook suitable for tenacity's ``before_sleep`` argument.
    """

    def _log(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "provider_attempt_failed",
            provider=provider_name,
            attempt=retry_state.attempt_number,
            wait=retry_state.next_action.sleep if retry_state.next_action else 0,
            error=str(exception),
        )

    return _log


def provider_retrying(
    provider_name: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY_SECONDS,
    max_delay: float = MAX_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> Retrying:
    """Create a ``Retrying`` controller for one provider.

    Configured with:
    - ``max_attempts`` attempts maximum
    - Exponential backoff without jitter (``base_delay`` doubling, capped at
      ``max_delay``)
    - Warning log before each retry
    - Original exception re-raised after exhaustion

    Every exception is retried; the caller decides what exhaustion means.

    Args:
        provider_name: Human-readable provider name (used in logs).
        max_attempts: Total attempts, including the first.
        base_delay: Delay after the first failure, in seconds.
        max_delay: Upper bound on any single delay, in seconds.
        sleep: Sleep function, injectable for tests.

    Returns:
        A ``tenacity.Retrying`` instance; call it with ``(fn, *args)``.
    """
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, min=0, max=max_delay),
        before_sleep=_before_sleep_log(provider_name),
        sleep=sleep,
        reraise=True,
    )
