"""Domain types, models, and errors for the offer pipeline."""

from offerdesk.domain.errors import (
    EmptyCompletionError,
    ExtractionFailedError,
    InputTooShortError,
    InvalidTransitionError,
    MalformedCompletionError,
    OfferDeskError,
    OfferValidationError,
    ParsingUnavailableError,
    ProviderError,
    ProviderNotConfiguredError,
    RecordForbiddenError,
    RecordNotFoundError,
    UnsupportedFormatError,
)
from offerdesk.domain.models import (
    BrandInfo,
    CampaignIntent,
    ContentSpec,
    GiftOfferInput,
    HolderProfile,
    StructuredOffer,
    Timeline,
    UsageRights,
)
from offerdesk.domain.types import (
    BASE_RATES,
    DEFAULT_TIER,
    HOURLY_RATES,
    BrandQuality,
    CompensationType,
    ContentExpectation,
    ContentFormat,
    ContentRequired,
    ConversionPotential,
    ConversionStatus,
    CreatorTier,
    DMTone,
    DMUrgency,
    Exclusivity,
    GiftApproach,
    OfferStatus,
    Platform,
    Recommendation,
    ScriptStage,
    get_base_rate,
    get_hourly_rate,
)

__all__ = [
    "BASE_RATES",
    "DEFAULT_TIER",
    "HOURLY_RATES",
    "BrandInfo",
    "BrandQuality",
    "CampaignIntent",
    "CompensationType",
    "ContentExpectation",
    "ContentFormat",
    "ContentRequired",
    "ContentSpec",
    "ConversionPotential",
    "ConversionStatus",
    "CreatorTier",
    "DMTone",
    "DMUrgency",
    "EmptyCompletionError",
    "Exclusivity",
    "ExtractionFailedError",
    "GiftApproach",
    "GiftOfferInput",
    "HolderProfile",
    "InputTooShortError",
    "InvalidTransitionError",
    "MalformedCompletionError",
    "OfferDeskError",
    "OfferStatus",
    "OfferValidationError",
    "ParsingUnavailableError",
    "Platform",
    "ProviderError",
    "ProviderNotConfiguredError",
    "Recommendation",
    "RecordForbiddenError",
    "RecordNotFoundError",
    "ScriptStage",
    "StructuredOffer",
    "Timeline",
    "UnsupportedFormatError",
    "UsageRights",
    "get_base_rate",
    "get_hourly_rate",
]
