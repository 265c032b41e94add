"""Domain enumerations and tier tables for the offer pipeline."""

from decimal import Decimal
from enum import StrEnum


class CreatorTier(StrEnum):
    """Audience-size classification of the offer holder."""

    NANO = "nano"
    MICRO = "micro"
    MID = "mid"
    RISING = "rising"
    MACRO = "macro"
    MEGA = "mega"
    CELEBRITY = "celebrity"


class Platform(StrEnum):
    """Platforms a structured offer can target."""

    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    TWITTER = "twitter"
    THREADS = "threads"
    LINKEDIN = "linkedin"


class ContentFormat(StrEnum):
    """Content formats a structured offer can request."""

    STATIC = "static"
    CAROUSEL = "carousel"
    STORY = "story"
    REEL = "reel"
    VIDEO = "video"
    LIVE = "live"
    UGC = "ugc"


class Exclusivity(StrEnum):
    """Exclusivity level requested in the usage-rights terms."""

    NONE = "none"
    CATEGORY = "category"
    FULL = "full"


class ContentRequired(StrEnum):
    """Content a brand expects in return for a gifted product."""

    ORGANIC_MENTION = "organic_mention"
    DEDICATED_POST = "dedicated_post"
    MULTIPLE_POSTS = "multiple_posts"
    VIDEO_CONTENT = "video_content"


class BrandQuality(StrEnum):
    """Holder's assessment of the brand behind a gift offer."""

    MAJOR_BRAND = "major_brand"
    ESTABLISHED_INDIE = "established_indie"
    NEW_UNKNOWN = "new_unknown"
    SUSPICIOUS = "suspicious"


class ConversionPotential(StrEnum):
    """Likelihood that a gifted relationship turns into paid work."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recommendation(StrEnum):
    """Recommended course of action for a gift offer."""

    ACCEPT_WITH_HOOK = "accept_with_hook"
    COUNTER_HYBRID = "counter_hybrid"
    ASK_BUDGET_FIRST = "ask_budget_first"
    DECLINE_POLITELY = "decline_politely"
    RUN_AWAY = "run_away"


class OfferStatus(StrEnum):
    """States in the offer record lifecycle."""

    RECEIVED = "received"
    CONTENT_CREATED = "content_created"
    FOLLOWED_UP = "followed_up"
    CONVERTED = "converted"
    DECLINED = "declined"
    ARCHIVED = "archived"


class ConversionStatus(StrEnum):
    """Progress of a conversion attempt on a tracked offer."""

    ATTEMPTING = "attempting"
    CONVERTED = "converted"
    REJECTED = "rejected"


class ScriptStage(StrEnum):
    """Stages of the conversion playbook."""

    PERFORMANCE_SHARE = "performance_share"
    FOLLOW_UP_30_DAY = "follow_up_30_day"
    NEW_LAUNCH_PITCH = "new_launch_pitch"
    RETURNING_BRAND_OFFER = "returning_brand_offer"


class CompensationType(StrEnum):
    """Compensation a brand DM proposes."""

    PAID = "paid"
    GIFTED = "gifted"
    HYBRID = "hybrid"
    UNCLEAR = "unclear"
    NONE_MENTIONED = "none_mentioned"


class DMTone(StrEnum):
    """Tone classification of a brand DM."""

    PROFESSIONAL = "professional"
    CASUAL = "casual"
    MASS_OUTREACH = "mass_outreach"
    SCAM_LIKELY = "scam_likely"


class DMUrgency(StrEnum):
    """Urgency of a brand DM."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ContentExpectation(StrEnum):
    """How explicitly a gift DM asks for content."""

    EXPLICIT = "explicit"
    IMPLIED = "implied"
    NONE = "none"


class GiftApproach(StrEnum):
    """Approach suggested by the DM analysis for a gift offer."""

    ACCEPT_AND_CONVERT = "accept_and_convert"
    COUNTER_WITH_HYBRID = "counter_with_hybrid"
    DECLINE = "decline"
    ASK_BUDGET = "ask_budget"


# Tier used whenever a profile carries a tier without a rate entry
DEFAULT_TIER = CreatorTier.MICRO

# Effective hourly rate for the holder's time, by tier
HOURLY_RATES: dict[CreatorTier, Decimal] = {
    CreatorTier.NANO: Decimal("30"),
    CreatorTier.MICRO: Decimal("50"),
    CreatorTier.MID: Decimal("75"),
    CreatorTier.RISING: Decimal("100"),
    CreatorTier.MACRO: Decimal("125"),
    CreatorTier.MEGA: Decimal("150"),
    CreatorTier.CELEBRITY: Decimal("200"),
}

# Base rate for one piece of sponsored content, by tier
BASE_RATES: dict[CreatorTier, Decimal] = {
    CreatorTier.NANO: Decimal("150"),
    CreatorTier.MICRO: Decimal("400"),
    CreatorTier.MID: Decimal("800"),
    CreatorTier.RISING: Decimal("1500"),
    CreatorTier.MACRO: Decimal("3000"),
    CreatorTier.MEGA: Decimal("6000"),
    CreatorTier.CELEBRITY: Decimal("12000"),
}


def get_hourly_rate(tier: str) -> Decimal:
    """Look up the hourly rate for a tier.

    Args:
        tier: A ``CreatorTier`` value (or its string form).

    Returns:
        The hourly rate for *tier*, or the ``DEFAULT_TIER`` rate when the
        tier has no entry.
    """
    try:
        return HOURLY_RATES[CreatorTier(tier)]
    except ValueError:
        return HOURLY_RATES[DEFAULT_TIER]


def get_base_rate(tier: str) -> Decimal:
    """Look up the per-post base rate for a tier, defaulting like ``get_hourly_rate``."""
    try:
        return BASE_RATES[CreatorTier(tier)]
    except ValueError:
        return BASE_RATES[DEFAULT_TIER]
