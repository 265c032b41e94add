"""Pydantic v2 models for the holder profile, structured offers, and gift inputs."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from offerdesk.domain.types import (
    BrandQuality,
    ContentFormat,
    ContentRequired,
    CreatorTier,
    Exclusivity,
    Platform,
)


class HolderProfile(BaseModel):
    """Economic baseline of the creator receiving an offer.

    ``tier`` is kept as a plain string so that profiles written with tiers
    this release does not know still load; rate lookups fall back to the
    default tier.
    """

    model_config = ConfigDict(frozen=True)

    tier: str = CreatorTier.MICRO
    total_reach: int = Field(default=0, ge=0)
    avg_engagement_rate: float = Field(default=0.0, ge=0.0)
    niches: list[str] = Field(default_factory=list)

    @field_validator("tier", mode="before")
    @classmethod
    def normalize_tier(cls, v: object) -> object:
        """Lower-case and strip tier strings."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class BrandInfo(BaseModel):
    """Who is making the offer."""

    name: str = ""
    industry: str = ""
    product: str = ""


class CampaignIntent(BaseModel):
    """What the brand wants the campaign to achieve."""

    objective: str = ""
    target_audience: str = ""
    budget_range: str = ""


class ContentSpec(BaseModel):
    """The content the brand is asking for."""

    platform: Platform = Platform.INSTAGRAM
    format: ContentFormat = ContentFormat.STATIC
    quantity: int = Field(default=1, ge=1)
    creative_direction: str = ""


class UsageRights(BaseModel):
    """How the brand may reuse the content."""

    duration_days: int = Field(default=0, ge=0)
    exclusivity: Exclusivity = Exclusivity.NONE
    paid_amplification: bool = False


class Timeline(BaseModel):
    """When the brand needs the content."""

    deadline: str = ""


class StructuredOffer(BaseModel):
    """Canonical extraction result for a brand brief or DM.

    Enum fields are always members of their allow-list; the parser's
    normalization step coerces anything else to the defaults above.
    """

    brand: BrandInfo = Field(default_factory=BrandInfo)
    campaign: CampaignIntent = Field(default_factory=CampaignIntent)
    content: ContentSpec = Field(default_factory=ContentSpec)
    usage_rights: UsageRights = Field(default_factory=UsageRights)
    timeline: Timeline = Field(default_factory=Timeline)
    raw_text: str = ""


class GiftOfferInput(BaseModel):
    """A product-instead-of-cash offer, as assessed by the holder."""

    model_config = ConfigDict(frozen=True)

    product_description: str = ""
    product_value: Decimal = Field(gt=0)
    content_required: ContentRequired = ContentRequired.DEDICATED_POST
    estimated_hours: Decimal = Field(default=Decimal("1"), ge=0)
    brand_quality: BrandQuality = BrandQuality.NEW_UNKNOWN
    would_buy: bool = False
    has_website: bool = False
    prior_creator_collabs: bool = False
    brand_followers: int | None = Field(default=None, ge=0)
