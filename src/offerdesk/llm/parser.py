"""Structured offer parser with per-provider retry and provider fallback.

For a single request the parser:

1. Rejects text shorter than the configured minimum (no network call).
2. Calls the primary provider with a fixed extraction prompt, retrying
   sequentially with exponential backoff until its attempt budget is spent.
3. Repeats the same loop against the secondary provider.
4. Raises ``ParsingUnavailableError`` if both are exhausted.

Every successful payload, whichever provider produced it, goes through the
same normalization step, which cannot fail.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from offerdesk.domain.errors import InputTooShortError, ParsingUnavailableError
from offerdesk.domain.models import HolderProfile, StructuredOffer
from offerdesk.llm.client import CompletionProvider, build_providers
from offerdesk.llm.dm import enrich_dm
from offerdesk.llm.models import DMAnalysis, DMExtractionPayload, OfferExtractionPayload
from offerdesk.llm.normalize import decode_json_object, normalize_dm, normalize_offer
from offerdesk.llm.prompts import (
    DM_ANALYSIS_SYSTEM_PROMPT,
    DM_ANALYSIS_USER_PROMPT,
    OFFER_EXTRACTION_SYSTEM_PROMPT,
)
from offerdesk.resilience.retry import (
    DEFAULT_BASE_DELAY_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    MAX_DELAY_SECONDS,
    provider_retrying,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

    from offerdesk.config import Settings
    from offerdesk.extraction.text import TextExtractor

logger = structlog.get_logger()

DEFAULT_TEMPERATURE = 0.1
MIN_BRIEF_LENGTH = 50
MIN_DM_LENGTH = 20


class OfferParser:
    """Turn free-form offer text into normalized structured records.

    Usage::

        parser = OfferParser(primary, secondary)
        offer = parser.parse_offer(brief_text)
        analysis = parser.parse_dm(dm_text, profile)
    """

    def __init__(
        self,
        primary: CompletionProvider,
        secondary: CompletionProvider,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY_SECONDS,
        max_delay: float = MAX_DELAY_SECONDS,
        temperature: float = DEFAULT_TEMPERATURE,
        min_brief_length: int = MIN_BRIEF_LENGTH,
        min_dm_length: int = MIN_DM_LENGTH,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the parser.

        Args:
            primary: Provider tried first.
            secondary: Provider tried only after the primary is exhausted.
            max_attempts: Attempts per provider, including the first.
            base_delay: Backoff delay after a provider's first failure, in
                seconds; doubles after each further failure.
            max_delay: Cap on any single backoff delay, in seconds.
            temperature: Sampling temperature sent to both providers.
            min_brief_length: Minimum stripped length for brief text.
            min_dm_length: Minimum stripped length for DM text.
            sleep: Sleep function used between attempts (injectable for tests).
        """
        self._providers: tuple[CompletionProvider, ...] = (primary, secondary)
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._temperature = temperature
        self._min_brief_length = min_brief_length
        self._min_dm_length = min_dm_length
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> OfferParser:
        """Build a parser with the configured primary and secondary providers."""
        primary, secondary = build_providers(settings)
        return cls(
            primary,
            secondary,
            max_attempts=settings.parser_max_attempts,
            base_delay=settings.parser_base_delay_seconds,
            max_delay=settings.parser_max_delay_seconds,
            temperature=settings.parser_temperature,
            min_brief_length=settings.min_brief_length,
            min_dm_length=settings.min_dm_length,
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def parse_offer(self, text: str) -> StructuredOffer:
        """Parse a brand brief into a ``StructuredOffer``.

        Args:
            text: Raw brief text (pasted or extracted from a file).

        Returns:
            The normalized offer, with ``raw_text`` set to the stripped input.

        Raises:
            InputTooShortError: If the stripped text is below the minimum.
            ParsingUnavailableError: If both providers exhaust their retries.
        """
        raw_text = text.strip()
        if len(raw_text) < self._min_brief_length:
            raise InputTooShortError(len(raw_text), self._min_brief_length, label="Brief text")

        data = self._complete_with_fallback(
            OFFER_EXTRACTION_SYSTEM_PROMPT, raw_text, OfferExtractionPayload
        )
        return normalize_offer(data, raw_text=raw_text)

    def parse_offer_file(
        self, data: bytes, filename: str, extractor: TextExtractor
    ) -> StructuredOffer:
        """Extract text from an uploaded file, then parse it as a brief.

        Raises:
            UnsupportedFormatError: If *extractor* does not handle the file type.
            ExtractionFailedError: If the file could not be read.
            InputTooShortError: If the extracted text is below the minimum.
            ParsingUnavailableError: If both providers exhaust their retries.
        """
        text = extractor.extract(data, filename)
        return self.parse_offer(text)

    def parse_dm(self, text: str, profile: HolderProfile) -> DMAnalysis:
        """Analyze a brand DM, detecting gift offers and drafting a reply.

        Raises:
            InputTooShortError: If the stripped text is below the DM minimum.
            ParsingUnavailableError: If both providers exhaust their retries.
        """
        dm_text = text.strip()
        if len(dm_text) < self._min_dm_length:
            raise InputTooShortError(len(dm_text), self._min_dm_length, label="DM text")

        data = self._complete_with_fallback(
            DM_ANALYSIS_SYSTEM_PROMPT,
            DM_ANALYSIS_USER_PROMPT.format(dm_text=dm_text),
            DMExtractionPayload,
        )
        return enrich_dm(normalize_dm(data), profile)

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def _request_json(
        self,
        provider: CompletionProvider,
        system_prompt: str,
        user_text: str,
        schema: type[BaseModel],
    ) -> dict[str, Any]:
        """One attempt: call *provider* and decode its answer as a JSON object."""
        raw = provider.complete(
            system_prompt,
            user_text,
            temperature=self._temperature,
            json_mode=True,
            schema=schema,
        )
        return decode_json_object(raw)

    def _complete_with_fallback(
        self, system_prompt: str, user_text: str, schema: type[BaseModel]
    ) -> dict[str, Any]:
        """Run each provider's retry loop in order until one succeeds."""
        failures: dict[str, BaseException] = {}

        for index, provider in enumerate(self._providers):
            retrying = provider_retrying(
                provider.name,
                max_attempts=self._max_attempts,
                base_delay=self._base_delay,
                max_delay=self._max_delay,
                sleep=self._sleep,
            )
            try:
                return retrying(self._request_json, provider, system_prompt, user_text, schema)
            except Exception as exc:
                failures[provider.name] = exc
                if index < len(self._providers) - 1:
                    logger.warning(
                        "provider_exhausted_falling_back",
                        provider=provider.name,
                        attempts=self._max_attempts,
                        error=str(exc),
                    )

        logger.error(
            "parsing_unavailable",
            providers=list(failures),
            errors={name: str(exc) for name, exc in failures.items()},
        )
        raise ParsingUnavailableError(failures)
