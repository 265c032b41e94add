"""Pydantic models for DM analysis, the gift-offer variant of extraction.

The structured-offer shape for briefs lives in ``offerdesk.domain.models``.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from offerdesk.domain.models import BrandInfo, ContentSpec
from offerdesk.domain.types import (
    CompensationType,
    ContentExpectation,
    ConversionPotential,
    DMTone,
    DMUrgency,
    GiftApproach,
)


class GiftSignal(BaseModel):
    """Gift-specific reading of a DM, present only for gift offers."""

    product_mentioned: str | None = None
    content_expectation: ContentExpectation = ContentExpectation.IMPLIED
    conversion_potential: ConversionPotential = ConversionPotential.MEDIUM
    recommended_approach: GiftApproach = GiftApproach.ASK_BUDGET


class DMExtraction(BaseModel):
    """Normalized provider output for a brand DM."""

    brand_name: str | None = None
    brand_handle: str | None = None
    deliverable_request: str | None = None
    compensation_type: CompensationType = CompensationType.UNCLEAR
    offered_amount: Decimal | None = None
    estimated_product_value: Decimal | None = None
    tone: DMTone = DMTone.CASUAL
    urgency: DMUrgency = DMUrgency.LOW
    red_flags: list[str] = Field(default_factory=list)
    green_flags: list[str] = Field(default_factory=list)
    is_gift_offer: bool = False
    gift_analysis: GiftSignal | None = None
    brand: BrandInfo | None = Field(
        default=None,
        description="Brand block for a structured offer, when a brand name was found",
    )
    content: ContentSpec | None = Field(
        default=None,
        description="Content request, when platform, format, or quantity was found",
    )


class DMAnalysis(DMExtraction):
    """DM extraction plus the locally derived recommendation fields."""

    suggested_rate: Decimal
    deal_quality_estimate: int = Field(ge=0, le=100)
    recommended_response: str
    next_steps: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Provider response schemas
# ---------------------------------------------------------------------------
# Every field is optional and enums are plain strings: these describe the
# shape requested from a provider, and normalization still decides what a
# value means.


class BrandPayload(BaseModel):
    name: str | None = None
    industry: str | None = None
    product: str | None = None


class CampaignPayload(BaseModel):
    objective: str | None = None
    target_audience: str | None = None
    budget_range: str | None = None


class ContentPayload(BaseModel):
    platform: str | None = None
    format: str | None = None
    quantity: int | None = None
    creative_direction: str | None = None


class UsageRightsPayload(BaseModel):
    duration_days: int | None = None
    exclusivity: str | None = None
    paid_amplification: bool | None = None


class TimelinePayload(BaseModel):
    deadline: str | None = None


class OfferExtractionPayload(BaseModel):
    """Response schema for brief extraction."""

    brand: BrandPayload | None = None
    campaign: CampaignPayload | None = None
    content: ContentPayload | None = None
    usage_rights: UsageRightsPayload | None = None
    timeline: TimelinePayload | None = None


class GiftAnalysisPayload(BaseModel):
    product_mentioned: str | None = None
    content_expectation: str | None = None
    conversion_potential: str | None = None
    recommended_approach: str | None = None


class DMExtractionPayload(BaseModel):
    """Response schema for DM analysis."""

    brand_name: str | None = None
    brand_handle: str | None = None
    deliverable_request: str | None = None
    compensation_type: str | None = None
    offered_amount: float | None = None
    estimated_product_value: float | None = None
    tone: str | None = None
    urgency: str | None = None
    red_flags: list[str] | None = None
    green_flags: list[str] | None = None
    is_gift_offer: bool | None = None
    gift_analysis: GiftAnalysisPayload | None = None
    extracted_platform: str | None = None
    extracted_format: str | None = None
    extracted_quantity: int | None = None
