"""Gift offer evaluation engine.

Re-exports the entry point and result types:
    from offerdesk.evaluation import evaluate_offer, OfferEvaluation
"""

from offerdesk.evaluation.boundaries import (
    format_money,
    generate_counter_offer,
    get_acceptance_boundaries,
    get_walk_away_point,
)
from offerdesk.evaluation.engine import (
    ESTIMATED_CPM,
    calculate_audience_value,
    calculate_effective_hourly_rate,
    calculate_minimum_add_on,
    calculate_strategic_score,
    calculate_time_value,
    calculate_worth_score,
    decide_recommendation,
    determine_conversion_potential,
)
from offerdesk.evaluation.evaluator import evaluate_offer
from offerdesk.evaluation.models import (
    AcceptanceBoundaries,
    OfferEvaluation,
    StrategicValue,
    ValueBreakdown,
)

__all__ = [
    "ESTIMATED_CPM",
    "AcceptanceBoundaries",
    "OfferEvaluation",
    "StrategicValue",
    "ValueBreakdown",
    "calculate_audience_value",
    "calculate_effective_hourly_rate",
    "calculate_minimum_add_on",
    "calculate_strategic_score",
    "calculate_time_value",
    "calculate_worth_score",
    "decide_recommendation",
    "determine_conversion_potential",
    "evaluate_offer",
    "format_money",
    "generate_counter_offer",
    "get_acceptance_boundaries",
    "get_walk_away_point",
]
