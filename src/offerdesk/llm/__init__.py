"""LLM integration package for offer intake.

Provides the completion-provider adapters, extraction prompts, untrusted
output normalization, DM enrichment, and the retrying, falling-back
``OfferParser``.
"""

from offerdesk.llm.client import (
    AnthropicProvider,
    CompletionProvider,
    OpenAIProvider,
    build_providers,
)
from offerdesk.llm.dm import (
    enrich_dm,
    estimate_deal_quality,
    is_likely_gift_offer,
    is_likely_mass_outreach,
)
from offerdesk.llm.models import DMAnalysis, DMExtraction, GiftSignal
from offerdesk.llm.normalize import decode_json_object, normalize_dm, normalize_offer
from offerdesk.llm.parser import MIN_BRIEF_LENGTH, MIN_DM_LENGTH, OfferParser

__all__ = [
    "MIN_BRIEF_LENGTH",
    "MIN_DM_LENGTH",
    "AnthropicProvider",
    "CompletionProvider",
    "DMAnalysis",
    "DMExtraction",
    "GiftSignal",
    "OfferParser",
    "OpenAIProvider",
    "build_providers",
    "decode_json_object",
    "enrich_dm",
    "estimate_deal_quality",
    "is_likely_gift_offer",
    "is_likely_mass_outreach",
    "normalize_dm",
    "normalize_offer",
]
