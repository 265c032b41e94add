"""Result models returned by the gift evaluation engine.

All models are frozen; the engine never persists them.  Callers decide
whether to copy any of the values onto an ``OfferRecord``.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from offerdesk.domain.types import ConversionPotential, Recommendation


class ValueBreakdown(BaseModel, frozen=True):
    """Monetary side of a gift offer.

    Attributes:
        product_value: Retail value of the gifted product.
        time_value: Holder's time to produce the content, at the tier rate.
        audience_value: Audience value scaled by the content-effort multiplier.
        total_value_providing: ``time_value + audience_value``.
        value_gap: ``product_value - total_value_providing``; positive favors
            the holder.
        effective_hourly_rate: Product value per hour of work, 0 when no
            hours are required.
    """

    product_value: Decimal
    time_value: Decimal
    audience_value: Decimal
    total_value_providing: Decimal
    value_gap: Decimal
    effective_hourly_rate: Decimal


class StrategicValue(BaseModel, frozen=True):
    """Non-monetary side of a gift offer."""

    score: int = Field(ge=0, le=10)
    portfolio_worthy: bool
    conversion_potential: ConversionPotential
    brand_reputation_boost: bool
    reasons: list[str] = Field(default_factory=list)


class AcceptanceBoundaries(BaseModel, frozen=True):
    """Limits the holder should hold to if they take a gift-only deal."""

    max_content_type: str
    time_limit: str
    rights_limit: str


class OfferEvaluation(BaseModel, frozen=True):
    """Complete evaluation of a gift offer.

    ``recommendation`` is always the decision-matrix output for
    ``worth_score`` and ``strategic_score``.
    """

    worth_score: int = Field(ge=0, le=100)
    strategic_score: int = Field(ge=0, le=10)
    recommendation: Recommendation
    breakdown: ValueBreakdown
    strategic_value: StrategicValue
    minimum_acceptable_add_on: Decimal = Field(ge=0)
    suggested_counter_offer: str
    walk_away_point: str
    acceptance_boundaries: AcceptanceBoundaries

    @property
    def conversion_potential(self) -> ConversionPotential:
        return self.strategic_value.conversion_potential
