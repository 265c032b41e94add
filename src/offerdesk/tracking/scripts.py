"""Conversion scripts tailored to a tracked offer."""

from datetime import datetime

from pydantic import BaseModel

from offerdesk.domain.types import ScriptStage
from offerdesk.responses import ResponseContext, conversion_playbook_script
from offerdesk.tracking.analytics import DEFAULT_FOLLOW_UP_DAYS
from offerdesk.tracking.models import OfferRecord

# Days since content after which the 30-day check-in gives way to a returning-brand offer
RETURNING_BRAND_AFTER_DAYS = 45


class FollowUpSuggestion(BaseModel, frozen=True):
    stage: ScriptStage
    reason: str


def format_number(value: int) -> str:
    """Compact display form: 1.2K, 3.4M."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def conversion_script(record: OfferRecord, stage: ScriptStage) -> str:
    """Render a playbook script for *record*.

    For the performance-share stage, the views/likes/saves placeholders are
    filled in once the record has view counts.
    """
    context = ResponseContext(
        brand_name=record.brand_name,
        product_name=record.product_description,
    )
    script = conversion_playbook_script(stage, context)

    if stage == ScriptStage.PERFORMANCE_SHARE and record.views:
        script = (
            script.replace("[X]", format_number(record.views), 1)
            .replace("[Y]", format_number(record.likes or 0), 1)
            .replace("[Z]", format_number(record.saves or 0), 1)
        )
    return script


def suggest_follow_up_script(record: OfferRecord, now: datetime) -> FollowUpSuggestion:
    """Pick the playbook stage that fits how long the content has been live."""
    if record.content_date is None:
        return FollowUpSuggestion(
            stage=ScriptStage.PERFORMANCE_SHARE,
            reason="Content not yet posted - wait until you have metrics to share.",
        )

    days_since_content = (now - record.content_date).days
    if days_since_content < DEFAULT_FOLLOW_UP_DAYS:
        return FollowUpSuggestion(
            stage=ScriptStage.PERFORMANCE_SHARE,
            reason="Perfect timing to share your content performance with the brand.",
        )
    if days_since_content < RETURNING_BRAND_AFTER_DAYS:
        return FollowUpSuggestion(
            stage=ScriptStage.FOLLOW_UP_30_DAY,
            reason="Great time for a 30-day check-in and pitch for paid work.",
        )
    return FollowUpSuggestion(
        stage=ScriptStage.RETURNING_BRAND_OFFER,
        reason="Enough time has passed - offer a returning brand discount.",
    )
