"""Derived queries and aggregate analytics over offer records.

Everything here is a pure function of the records passed in.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from offerdesk.domain.types import OfferStatus
from offerdesk.tracking.models import OfferRecord

# Minimum engagement score for a record to count as ready to convert
MIN_ENGAGEMENT_SCORE_FOR_CONVERSION = 50.0

# Days after content goes live before a follow-up is due
DEFAULT_FOLLOW_UP_DAYS = 14

ENGAGEMENT_WEIGHTS: dict[str, float] = {
    "views": 0.001,
    "likes": 0.1,
    "comments": 0.5,
    "saves": 0.3,
    "shares": 0.2,
}


class OfferAnalytics(BaseModel, frozen=True):
    """Conversion analytics for one holder's tracked offers.

    Attributes:
        total_offers: Records that are not archived.
        total_product_value: Sum of product value over non-archived records.
        converted_count: Records in the converted state.
        conversion_rate: ``converted_count / total_offers``, 0 with no offers.
        revenue_from_converted: Sum of converted amounts.
        roi: ``revenue_from_converted / total_product_value``, 0 with no value.
        avg_days_to_conversion: Mean whole days from receipt to resolution
            over converted records, or None when there are none.
        follow_ups_due: Records whose follow-up is due now.
        offers_with_content: Records with content attached.
        ready_to_convert: Records ready for a conversion pitch.
    """

    total_offers: int = 0
    total_product_value: Decimal = Decimal("0")
    converted_count: int = 0
    conversion_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    revenue_from_converted: Decimal = Decimal("0")
    roi: float = 0.0
    avg_days_to_conversion: float | None = None
    follow_ups_due: int = 0
    offers_with_content: int = 0
    ready_to_convert: int = 0


def engagement_score(record: OfferRecord) -> float:
    """Weighted sum of a record's performance metrics; missing metrics count as 0."""
    return sum(
        (getattr(record, metric) or 0) * weight for metric, weight in ENGAGEMENT_WEIGHTS.items()
    )


def is_ready_to_convert(record: OfferRecord) -> bool:
    """Content is live, no follow-up sent yet, and engagement clears the threshold."""
    return (
        record.status == OfferStatus.CONTENT_CREATED
        and not record.follow_up_sent
        and engagement_score(record) >= MIN_ENGAGEMENT_SCORE_FOR_CONVERSION
    )


def is_follow_up_due(record: OfferRecord, now: datetime) -> bool:
    return (
        record.status == OfferStatus.CONTENT_CREATED
        and not record.follow_up_sent
        and record.follow_up_date is not None
        and record.follow_up_date <= now
    )


def compute_analytics(records: list[OfferRecord], now: datetime) -> OfferAnalytics:
    """Aggregate analytics over a holder's full record set.

    Args:
        records: Every record the holder owns, archived ones included.
        now: Reference time for follow-up due dates.
    """
    active = [r for r in records if r.status != OfferStatus.ARCHIVED]
    converted = [r for r in records if r.status == OfferStatus.CONVERTED]

    total_product_value = sum((r.product_value for r in active), Decimal("0"))
    revenue = sum((r.converted_amount or Decimal("0") for r in converted), Decimal("0"))

    resolved_days = [
        (r.resolved_at - r.date_received).days for r in converted if r.resolved_at is not None
    ]

    return OfferAnalytics(
        total_offers=len(active),
        total_product_value=total_product_value,
        converted_count=len(converted),
        conversion_rate=len(converted) / len(active) if active else 0.0,
        revenue_from_converted=revenue,
        roi=float(revenue / total_product_value) if total_product_value > 0 else 0.0,
        avg_days_to_conversion=(
            sum(resolved_days) / len(resolved_days) if resolved_days else None
        ),
        follow_ups_due=sum(1 for r in records if is_follow_up_due(r, now)),
        offers_with_content=sum(1 for r in records if r.content_type is not None),
        ready_to_convert=sum(1 for r in records if is_ready_to_convert(r)),
    )
