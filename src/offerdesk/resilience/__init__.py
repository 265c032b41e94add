"""Resilience infrastructure for provider calls with retry and backoff."""

from offerdesk.resilience.retry import provider_retrying

__all__ = [
    "provider_retrying",
]
