"""Acceptance boundaries and ready-to-send guidance for gift offers."""

from decimal import Decimal

from offerdesk.domain.models import GiftOfferInput
from offerdesk.domain.types import ContentRequired, Recommendation, get_hourly_rate
from offerdesk.evaluation.models import AcceptanceBoundaries

CONTENT_TYPE_DISPLAY: dict[ContentRequired, str] = {
    ContentRequired.ORGANIC_MENTION: "organic story/mention",
    ContentRequired.DEDICATED_POST: "dedicated post",
    ContentRequired.MULTIPLE_POSTS: "multiple posts",
    ContentRequired.VIDEO_CONTENT: "video content",
}

# Value-gap percentages above which the deliverable is cut back
SEVERE_GAP_PERCENT = Decimal("50")
MODERATE_GAP_PERCENT = Decimal("25")

RIGHTS_LIMIT = "No usage rights beyond your own post. Brand cannot repost or use in ads."
NO_COUNTER_NEEDED = "No counter needed - this gift is fair value for the content requested."

WALK_AWAY_POINTS: dict[Recommendation, str] = {
    Recommendation.RUN_AWAY: (
        "This deal has too many red flags. Politely decline and move on."
    ),
    Recommendation.DECLINE_POLITELY: (
        "If they won't add any budget, thank them and decline. Your time is worth more."
    ),
    Recommendation.COUNTER_HYBRID: (
        "If they reject the hybrid offer and insist on gift-only, "
        "limit your deliverable to a story mention."
    ),
    Recommendation.ASK_BUDGET_FIRST: (
        "If there's no budget at all and the product value doesn't justify "
        "your time, politely pass."
    ),
    Recommendation.ACCEPT_WITH_HOOK: (
        "If they become demanding about deliverables or usage rights, "
        "revisit the conversation about paid work."
    ),
}


def format_money(amount: Decimal) -> str:
    """Render a dollar amount, dropping cents when it is a whole number."""
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def get_acceptance_boundaries(
    offer: GiftOfferInput, gap_percentage: Decimal
) -> AcceptanceBoundaries:
    """Limit what the holder gives for a gift-only deal.

    Args:
        offer: The gift offer being evaluated.
        gap_percentage: Shortfall as a percentage of what the holder provides.

    Returns:
        Maximum content, visibility window, and usage-rights limit.
    """
    required = offer.content_required

    if gap_percentage > SEVERE_GAP_PERCENT:
        max_content = "Organic story mention only (not a feed post)"
    elif gap_percentage > MODERATE_GAP_PERCENT:
        if required == ContentRequired.VIDEO_CONTENT:
            max_content = "One short-form video (under 30 seconds)"
        else:
            max_content = "One story OR one feed post (not both)"
    else:
        max_content = f"{CONTENT_TYPE_DISPLAY[required]} as requested"

    if required == ContentRequired.ORGANIC_MENTION or gap_percentage > MODERATE_GAP_PERCENT:
        time_limit = "24-hour story only, not a permanent feed post"
    else:
        time_limit = "Standard post duration (can archive after 30 days if desired)"

    return AcceptanceBoundaries(
        max_content_type=max_content,
        time_limit=time_limit,
        rights_limit=RIGHTS_LIMIT,
    )


def get_walk_away_point(recommendation: Recommendation) -> str:
    return WALK_AWAY_POINTS[recommendation]


def generate_counter_offer(
    offer: GiftOfferInput, minimum_add_on: Decimal, tier: str
) -> str:
    """Draft the hybrid counter-offer, or say none is needed."""
    if minimum_add_on <= 0:
        return NO_COUNTER_NEEDED

    full_rate = get_hourly_rate(tier) * offer.estimated_hours
    content = CONTENT_TYPE_DISPLAY[offer.content_required]
    return (
        f"I'd love to work together! For a {content}, I typically charge "
        f"${format_money(full_rate)}. I'd be happy to do a hybrid collaboration:\n\n"
        f"-> Product gifted + ${format_money(minimum_add_on)} = {content} "
        "with my authentic review\n\n"
        "This lets me create the quality content your brand deserves. Would that work?"
    )
