"""Local enrichment of DM extractions: suggested rate, deal quality, reply text.

Also provides phrase-based pre-filters that classify a DM without any
provider call.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from offerdesk.domain.models import HolderProfile
from offerdesk.domain.types import (
    CompensationType,
    ConversionPotential,
    DMTone,
    GiftApproach,
    get_base_rate,
)
from offerdesk.llm.models import DMAnalysis, DMExtraction

GIFT_TRIGGER_PHRASES: tuple[str, ...] = (
    "send you product",
    "send you our",
    "gift",
    "gifted",
    "gifting",
    "try our",
    "in exchange for",
    "free product",
    "complimentary",
    "no monetary",
    "product seeding",
    "pr package",
    "pr gift",
    "sample",
    "we'd love to send",
    "love to send you",
)

MASS_OUTREACH_SIGNALS: tuple[str, ...] = (
    "hey babe",
    "hey girl",
    "hey hun",
    "hey beauty",
    "hey gorgeous",
    "hi there!",
    "hope this finds you well",
    "we love your feed",
    "we love your content",
    "we've been following",
)

# Hybrid counters ask for this share of the holder's base rate
HYBRID_RATE_SHARE = Decimal("0.5")


def is_likely_gift_offer(text: str) -> bool:
    """Return True if *text* contains any gift-offer phrase."""
    lowered = text.lower()
    return any(phrase in lowered for phrase in GIFT_TRIGGER_PHRASES)


def is_likely_mass_outreach(text: str) -> bool:
    """Return True if *text* contains any mass-outreach greeting or filler."""
    lowered = text.lower()
    return any(signal in lowered for signal in MASS_OUTREACH_SIGNALS)


def suggested_rate(profile: HolderProfile) -> Decimal:
    """Base rate for one sponsored post at the holder's tier."""
    return get_base_rate(profile.tier)


def hybrid_suggested_rate(profile: HolderProfile) -> Decimal:
    """Cash component of a product-plus-payment counter."""
    return (suggested_rate(profile) * HYBRID_RATE_SHARE).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )


def estimate_deal_quality(extraction: DMExtraction, profile: HolderProfile) -> int:
    """Score a DM from 0 to 100 on compensation, tone, and flags.

    Starts from a neutral 50; paid offers are weighed against the holder's
    base rate, gift offers by their conversion potential.
    """
    score = 50
    compensation = extraction.compensation_type

    if compensation == CompensationType.PAID:
        score += 20
        if extraction.offered_amount:
            ratio = extraction.offered_amount / suggested_rate(profile)
            if ratio >= 1:
                score += 15
            elif ratio >= Decimal("0.8"):
                score += 10
            elif ratio >= Decimal("0.5"):
                score += 5
            else:
                score -= 5
    elif compensation == CompensationType.HYBRID:
        score += 10
    elif compensation == CompensationType.GIFTED:
        score -= 10
        gift = extraction.gift_analysis
        potential = gift.conversion_potential if gift else None
        if potential == ConversionPotential.HIGH:
            score += 15
        elif potential == ConversionPotential.MEDIUM:
            score += 5
    elif compensation == CompensationType.UNCLEAR:
        score -= 5

    tone_points = {
        DMTone.PROFESSIONAL: 15,
        DMTone.CASUAL: 5,
        DMTone.MASS_OUTREACH: -10,
        DMTone.SCAM_LIKELY: -30,
    }
    score += tone_points[extraction.tone]

    score += min(len(extraction.green_flags) * 5, 15)
    score -= min(len(extraction.red_flags) * 7, 25)

    return max(0, min(100, score))


def recommended_response(extraction: DMExtraction, profile: HolderProfile) -> str:
    """Compose a ready-to-send reply for the DM."""
    brand_name = extraction.brand_name or "there"
    rate = suggested_rate(profile)

    if extraction.is_gift_offer and extraction.gift_analysis:
        approach = extraction.gift_analysis.recommended_approach
        if approach == GiftApproach.ACCEPT_AND_CONVERT:
            return (
                f"Hi {brand_name}! Thanks for reaching out - I'd love to try your product!\n\n"
                "I'm happy to share my honest experience with my audience. If the content "
                "performs well, I'd love to discuss a paid partnership for future campaigns!\n\n"
                "Where should I send my shipping info?"
            )
        if approach == GiftApproach.COUNTER_WITH_HYBRID:
            return (
                f"Hi {brand_name}! Thank you for thinking of me - the product looks amazing!\n\n"
                f"For a dedicated post, my rate is typically ${rate}. I'd be happy to do a "
                "hybrid collaboration:\n\n"
                f"-> Product gifted + ${hybrid_suggested_rate(profile)} = dedicated content "
                "with my authentic review\n\n"
                "This lets me create the high-quality content your brand deserves. "
                "Would that work with your budget?"
            )
        if approach == GiftApproach.DECLINE:
            return (
                "Thanks so much for thinking of me!\n\n"
                "I'm currently focused on paid partnerships, but I appreciate you reaching "
                "out. If you have budget for a collaboration in the future, I'd love to chat!"
                "\n\nBest of luck with your campaign!"
            )
        return (
            f"Hi {brand_name}! Thanks for reaching out!\n\n"
            "Before I confirm, I have a few quick questions:\n"
            "1. What's the retail value of the product?\n"
            "2. What deliverables are you hoping for?\n"
            "3. Is there a budget for this partnership, or is it product-only?\n\n"
            "Looking forward to hearing more!"
        )

    if extraction.compensation_type == CompensationType.PAID and extraction.offered_amount:
        if extraction.offered_amount >= rate * Decimal("0.8"):
            return (
                f"Hi {brand_name}! Thank you for the opportunity - I'd love to work together!"
                "\n\nThe rate works for me. Could you share more details about:\n"
                "- Timeline and deadlines\n"
                "- Usage rights and duration\n"
                "- Content approval process\n\n"
                "Looking forward to collaborating!"
            )
        return (
            f"Hi {brand_name}! Thanks for reaching out - I love the concept!\n\n"
            "Based on my audience reach and engagement, my rate for this type of content "
            f"is ${rate}. This includes:\n"
            "- High-quality content creation\n"
            "- 30-day usage rights\n"
            "- One round of revisions\n\n"
            "Would this work with your budget? Happy to discuss further!"
        )

    if extraction.compensation_type in (
        CompensationType.UNCLEAR,
        CompensationType.NONE_MENTIONED,
    ):
        return (
            f"Hi {brand_name}! Thanks for reaching out!\n\n"
            "I'd love to learn more about this opportunity. Could you share:\n"
            "- What deliverables you're looking for?\n"
            "- What's the budget for this campaign?\n"
            "- Timeline and usage rights?\n\n"
            "Looking forward to hearing more details!"
        )

    return (
        f"Hi {brand_name}! Thanks for reaching out - I'm interested in learning more.\n\n"
        f"My rate for branded content is ${rate}. Could you share more details about "
        "the campaign?\n\nLooking forward to hearing from you!"
    )


def next_steps(extraction: DMExtraction) -> list[str]:
    """List what the holder should do next with this DM."""
    steps: list[str] = []
    gift = extraction.gift_analysis
    approach = gift.recommended_approach if gift else None

    if extraction.is_gift_offer:
        steps.append("Consider if the product aligns with your brand")
        steps.append("Evaluate the gift with the offer evaluator")
        if approach == GiftApproach.COUNTER_WITH_HYBRID:
            steps.append("Send hybrid counter-offer")
            steps.append("Track the brand for follow-up")
        elif approach == GiftApproach.ACCEPT_AND_CONVERT:
            steps.append("Accept and track for conversion opportunity")
            steps.append("Set reminder to follow up after content performs well")
    elif extraction.compensation_type == CompensationType.PAID:
        steps.append("Review the offered rate against your rate card")
        steps.append("Clarify usage rights and exclusivity")
        steps.append("Request contract before starting work")
    else:
        steps.append("Ask clarifying questions about budget")
        steps.append("Research the brand's legitimacy")
        steps.append("Don't commit until compensation is clear")

    if extraction.red_flags:
        steps.append("Address red flags before proceeding")

    return steps


def enrich_dm(extraction: DMExtraction, profile: HolderProfile) -> DMAnalysis:
    """Attach the derived recommendation fields to a normalized extraction."""
    if extraction.is_gift_offer:
        rate = hybrid_suggested_rate(profile)
    else:
        rate = suggested_rate(profile)
    return DMAnalysis(
        **extraction.model_dump(),
        suggested_rate=rate,
        deal_quality_estimate=estimate_deal_quality(extraction, profile),
        recommended_response=recommended_response(extraction, profile),
        next_steps=next_steps(extraction),
    )
