"""Top-level gift offer evaluation."""

import structlog

from offerdesk.domain.models import GiftOfferInput, HolderProfile
from offerdesk.evaluation.boundaries import (
    generate_counter_offer,
    get_acceptance_boundaries,
    get_walk_away_point,
)
from offerdesk.evaluation.engine import (
    calculate_minimum_add_on,
    calculate_strategic_value,
    calculate_value_breakdown,
    calculate_worth_score,
    decide_recommendation,
    value_gap_percentage,
)
from offerdesk.evaluation.models import OfferEvaluation

logger = structlog.get_logger()


def evaluate_offer(offer: GiftOfferInput, profile: HolderProfile) -> OfferEvaluation:
    """Evaluate a gift offer against the holder's profile.

    Computes the value exchange, strategic value, worth score, and the
    decision-matrix recommendation, plus counter-offer, walk-away, and
    boundary guidance.  Never raises for a validated ``GiftOfferInput``.

    Args:
        offer: The gift offer details.
        profile: The holder's tier and audience metrics.

    Returns:
        The complete ``OfferEvaluation``.
    """
    breakdown = calculate_value_breakdown(offer, profile)
    strategic = calculate_strategic_value(offer)
    worth_score = calculate_worth_score(offer, breakdown, strategic.score, profile.tier)
    recommendation = decide_recommendation(worth_score, strategic.score)
    add_on = calculate_minimum_add_on(breakdown.value_gap)

    logger.debug(
        "offer_evaluated",
        worth_score=worth_score,
        strategic_score=strategic.score,
        recommendation=recommendation,
    )

    return OfferEvaluation(
        worth_score=worth_score,
        strategic_score=strategic.score,
        recommendation=recommendation,
        breakdown=breakdown,
        strategic_value=strategic,
        minimum_acceptable_add_on=add_on,
        suggested_counter_offer=generate_counter_offer(offer, add_on, profile.tier),
        walk_away_point=get_walk_away_point(recommendation),
        acceptance_boundaries=get_acceptance_boundaries(
            offer, value_gap_percentage(breakdown)
        ),
    )
