"""Scoring engine for gift (product-instead-of-cash) offers.

Pure, synchronous functions with no I/O.  Monetary values use Decimal
arithmetic; whole-dollar figures are rounded with ROUND_HALF_UP.

The calibration constants below are product decisions, not derived values,
and are kept at module level so they can be tuned in one place.
"""

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

from offerdesk.domain.models import GiftOfferInput, HolderProfile
from offerdesk.domain.types import (
    BrandQuality,
    ContentRequired,
    ConversionPotential,
    Recommendation,
    get_hourly_rate,
)
from offerdesk.evaluation.models import StrategicValue, ValueBreakdown

TWO_PLACES = Decimal("0.01")
WHOLE_DOLLARS = Decimal("1")

# Audience value: followers x engagement x multiplier x CPM
ESTIMATED_CPM = Decimal("5")
ENGAGEMENT_VALUE_MULTIPLIER = Decimal("0.001")

CONTENT_EFFORT_MULTIPLIERS: dict[ContentRequired, Decimal] = {
    ContentRequired.ORGANIC_MENTION: Decimal("0.5"),
    ContentRequired.DEDICATED_POST: Decimal("1.0"),
    ContentRequired.MULTIPLE_POSTS: Decimal("2.0"),
    ContentRequired.VIDEO_CONTENT: Decimal("1.5"),
}

BRAND_QUALITY_SCORES: dict[BrandQuality, int] = {
    BrandQuality.MAJOR_BRAND: 3,
    BrandQuality.ESTABLISHED_INDIE: 2,
    BrandQuality.NEW_UNKNOWN: 0,
    BrandQuality.SUSPICIOUS: -5,
}

WOULD_BUY_POINTS = 2
PRIOR_COLLABS_POINTS = 2
WEBSITE_POINTS = 1
LARGE_FOLLOWING_POINTS = 1
LARGE_FOLLOWING_THRESHOLD = 100_000
INDIE_FOLLOWING_THRESHOLD = 50_000
STRATEGIC_SCORE_MAX = 10

WORTH_BASE = Decimal("50")
WORTH_GAP_CAP = Decimal("25")
WORTH_GAP_SCALE = Decimal("50")
STRATEGIC_WEIGHT = 2
SUSPICIOUS_PENALTY = 30
MAJOR_BRAND_BONUS = 10
FULL_RATE_BONUS = 10
HALF_RATE_BONUS = 5

ADD_ON_GAP_SHARE = Decimal("0.5")
ADD_ON_INCREMENT = Decimal("25")


def _round_dollars(amount: Decimal) -> Decimal:
    return amount.quantize(WHOLE_DOLLARS, rounding=ROUND_HALF_UP)


def calculate_time_value(hours: Decimal, tier: str) -> Decimal:
    """Value of the holder's time: ``hours x hourly rate`` for *tier*.

    Args:
        hours: Estimated hours to produce the content.
        tier: Holder tier; unknown tiers use the default tier's rate.

    Returns:
        The time value, quantized to cents (no further rounding).
    """
    return (hours * get_hourly_rate(tier)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_audience_value(followers: int, engagement_rate: float) -> Decimal:
    """CPM-style value of the holder's audience, in whole dollars.

    Args:
        followers: Holder's total reach.
        engagement_rate: Average engagement rate as a percentage (4.5 = 4.5%).
    """
    reach_value = (
        Decimal(followers)
        * (Decimal(str(engagement_rate)) / 100)
        * ENGAGEMENT_VALUE_MULTIPLIER
        * ESTIMATED_CPM
    )
    return _round_dollars(reach_value)


def calculate_effective_hourly_rate(product_value: Decimal, hours: Decimal) -> Decimal:
    """Product value earned per hour of work; 0 when *hours* is not positive."""
    if hours <= 0:
        return Decimal("0")
    return (product_value / hours).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_value_breakdown(
    offer: GiftOfferInput, profile: HolderProfile
) -> ValueBreakdown:
    """Compute what the holder receives against what they provide."""
    time_value = calculate_time_value(offer.estimated_hours, profile.tier)
    audience_value = calculate_audience_value(profile.total_reach, profile.avg_engagement_rate)
    scaled_audience_value = _round_dollars(
        audience_value * CONTENT_EFFORT_MULTIPLIERS[offer.content_required]
    )
    total = time_value + scaled_audience_value

    return ValueBreakdown(
        product_value=offer.product_value,
        time_value=time_value,
        audience_value=scaled_audience_value,
        total_value_providing=total,
        value_gap=offer.product_value - total,
        effective_hourly_rate=calculate_effective_hourly_rate(
            offer.product_value, offer.estimated_hours
        ),
    )


def calculate_strategic_score(offer: GiftOfferInput) -> tuple[int, list[str]]:
    """Score non-monetary value from 0 to 10.

    Each contributing signal appends a human-readable reason.

    Returns:
        Tuple of (clamped score, reasons).
    """
    score = 0
    reasons: list[str] = []

    brand_score = BRAND_QUALITY_SCORES[offer.brand_quality]
    score += brand_score
    if offer.brand_quality == BrandQuality.MAJOR_BRAND:
        reasons.append("Major brand adds portfolio credibility")
    elif offer.brand_quality == BrandQuality.ESTABLISHED_INDIE:
        reasons.append("Established indie brand is trustworthy")
    elif offer.brand_quality == BrandQuality.SUSPICIOUS:
        reasons.append("Suspicious brand signals detected - proceed with caution")

    if offer.would_buy:
        score += WOULD_BUY_POINTS
        reasons.append("Product you'd genuinely use adds authenticity")

    if offer.prior_creator_collabs:
        score += PRIOR_COLLABS_POINTS
        reasons.append("Brand has creator collab history (higher conversion potential)")

    if offer.has_website:
        score += WEBSITE_POINTS
        reasons.append("Legitimate website confirms brand credibility")

    if offer.brand_followers is not None and offer.brand_followers >= LARGE_FOLLOWING_THRESHOLD:
        score += LARGE_FOLLOWING_POINTS
        reasons.append("Large brand following suggests marketing budget")

    return max(0, min(STRATEGIC_SCORE_MAX, score)), reasons


def determine_conversion_potential(offer: GiftOfferInput) -> ConversionPotential:
    """Classify how likely the brand is to turn this into paid work.

    Rules are checked in order; the first match wins.
    """
    quality = offer.brand_quality

    if (
        quality == BrandQuality.MAJOR_BRAND
        and offer.has_website
        and offer.prior_creator_collabs
    ):
        return ConversionPotential.HIGH

    if (
        quality == BrandQuality.ESTABLISHED_INDIE
        and offer.has_website
        and (
            offer.prior_creator_collabs
            or (offer.brand_followers or 0) >= INDIE_FOLLOWING_THRESHOLD
        )
    ):
        return ConversionPotential.HIGH

    if quality == BrandQuality.SUSPICIOUS or (
        quality == BrandQuality.NEW_UNKNOWN and not offer.has_website
    ):
        return ConversionPotential.LOW

    return ConversionPotential.MEDIUM


def is_portfolio_worthy(offer: GiftOfferInput) -> bool:
    """Major brands always; established indies with a website and collab history."""
    if offer.brand_quality == BrandQuality.MAJOR_BRAND:
        return True
    return (
        offer.brand_quality == BrandQuality.ESTABLISHED_INDIE
        and offer.has_website
        and offer.prior_creator_collabs
    )


def calculate_strategic_value(offer: GiftOfferInput) -> StrategicValue:
    """Bundle strategic score, flags, and reasons for an offer."""
    score, reasons = calculate_strategic_score(offer)
    potential = determine_conversion_potential(offer)

    if potential == ConversionPotential.HIGH:
        reasons.append("High potential to convert to paid partnership")
    elif potential == ConversionPotential.LOW:
        reasons.append("Low likelihood of becoming a paid partnership")

    return StrategicValue(
        score=score,
        portfolio_worthy=is_portfolio_worthy(offer),
        conversion_potential=potential,
        brand_reputation_boost=offer.brand_quality == BrandQuality.MAJOR_BRAND,
        reasons=reasons,
    )


def value_gap_percentage(breakdown: ValueBreakdown) -> Decimal:
    """Shortfall as a percentage of what the holder provides.

    Returns 100 when the holder provides nothing measurable.
    """
    total = breakdown.total_value_providing
    if total <= 0:
        return Decimal("100")
    return (total - breakdown.product_value) / total * 100


def _value_gap_points(breakdown: ValueBreakdown) -> Decimal:
    gap = breakdown.value_gap
    total = breakdown.total_value_providing
    if total <= 0:
        return WORTH_GAP_CAP if gap > 0 else Decimal("0")

    points = min(WORTH_GAP_CAP, abs(gap) / total * WORTH_GAP_SCALE)
    return points if gap >= 0 else -points


def calculate_worth_score(
    offer: GiftOfferInput,
    breakdown: ValueBreakdown,
    strategic_score: int,
    tier: str,
) -> int:
    """Score the overall fairness of a gift offer from 0 to 100.

    Starts at 50, adds a capped value-gap term, twice the strategic score,
    the brand-quality adjustment, and the effective-hourly-rate bonus, then
    rounds and clamps.
    """
    score = WORTH_BASE + _value_gap_points(breakdown)
    score += strategic_score * STRATEGIC_WEIGHT

    if offer.brand_quality == BrandQuality.SUSPICIOUS:
        score -= SUSPICIOUS_PENALTY
    elif offer.brand_quality == BrandQuality.MAJOR_BRAND:
        score += MAJOR_BRAND_BONUS

    hourly_rate = get_hourly_rate(tier)
    if breakdown.effective_hourly_rate >= hourly_rate:
        score += FULL_RATE_BONUS
    elif breakdown.effective_hourly_rate >= hourly_rate / 2:
        score += HALF_RATE_BONUS

    rounded = int(score.quantize(WHOLE_DOLLARS, rounding=ROUND_HALF_UP))
    return max(0, min(100, rounded))


def decide_recommendation(worth_score: int, strategic_score: int) -> Recommendation:
    """Map worth and strategic scores onto exactly one recommendation.

    ==========  =========  ================
    worth       strategic  recommendation
    ==========  =========  ================
    < 30        any        run_away
    30-49       any        decline_politely
    50-69       >= 5       counter_hybrid
    50-69       < 5        ask_budget_first
    >= 70       >= 7       accept_with_hook
    >= 70       5-6        counter_hybrid
    >= 70       < 5        ask_budget_first
    ==========  =========  ================
    """
    if worth_score < 30:
        return Recommendation.RUN_AWAY
    if worth_score < 50:
        return Recommendation.DECLINE_POLITELY
    if worth_score >= 70 and strategic_score >= 7:
        return Recommendation.ACCEPT_WITH_HOOK
    if strategic_score >= 5:
        return Recommendation.COUNTER_HYBRID
    return Recommendation.ASK_BUDGET_FIRST


def calculate_minimum_add_on(value_gap: Decimal) -> Decimal:
    """Cash add-on covering half of a negative gap, rounded up to a $25 step.

    Returns 0 when the gap already favors the holder.
    """
    if value_gap >= 0:
        return Decimal("0")
    half = abs(value_gap) * ADD_ON_GAP_SHARE
    steps = (half / ADD_ON_INCREMENT).to_integral_value(rounding=ROUND_CEILING)
    return steps * ADD_ON_INCREMENT
