"""Domain-specific exception classes for the offer pipeline."""

from offerdesk.domain.types import OfferStatus


class OfferDeskError(Exception):
    """Base class for all domain errors in the offer pipeline."""


class OfferValidationError(OfferDeskError):
    """Raised when caller input is rejected before any work is attempted."""


class InputTooShortError(OfferValidationError):
    """Raised when offer text is shorter than the parser's minimum length.

    Attributes:
        length: Length of the (stripped) text that was submitted.
        minimum: The minimum accepted length.
    """

    def __init__(self, length: int, minimum: int, label: str = "Offer text") -> None:
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"{label} is too short ({length} characters). "
            f"Please provide at least {minimum} characters of content."
        )


class ProviderError(OfferDeskError):
    """Raised by a completion provider for any failed call.

    The parser retries every provider failure uniformly, so subclasses exist
    only to make log output more specific.
    """


class ProviderNotConfiguredError(ProviderError):
    """Raised when a provider is called without credentials."""


class EmptyCompletionError(ProviderError):
    """Raised when a provider returns no text."""


class MalformedCompletionError(ProviderError):
    """Raised when a provider's text cannot be decoded into a JSON object."""


class ParsingUnavailableError(OfferDeskError):
    """Raised when every provider has exhausted its retry budget.

    Attributes:
        failures: Mapping of provider name to the last error it raised.
    """

    def __init__(self, failures: dict[str, BaseException]) -> None:
        self.failures = failures
        super().__init__(
            "Failed to parse with all available providers. Please try again later."
        )


class RecordNotFoundError(OfferDeskError):
    """Raised when an offer record does not exist."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Offer record '{record_id}' not found")


class RecordForbiddenError(OfferDeskError):
    """Raised when an offer record exists but belongs to another holder."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Offer record '{record_id}' is owned by another holder")


class InvalidTransitionError(OfferDeskError):
    """Raised when a lifecycle event is not allowed from the record's state.

    Attributes:
        current_state: The state the record was in when the event was applied.
        event: The event that was rejected.
    """

    def __init__(self, current_state: OfferStatus, event: str) -> None:
        self.current_state = current_state
        self.event = event
        super().__init__(f"Cannot apply event '{event}' in state '{current_state}'")


class UnsupportedFormatError(OfferDeskError):
    """Raised when a file extension has no text extractor."""

    def __init__(self, extension: str, supported: tuple[str, ...]) -> None:
        self.extension = extension
        super().__init__(
            f"Unsupported file type: {extension or 'unknown'}. "
            f"Supported formats: {', '.join(supported)}"
        )


class ExtractionFailedError(OfferDeskError):
    """Raised when a supported file could not be turned into text."""
