"""Offer lifecycle tracking: records, transitions, storage, and analytics."""

from offerdesk.tracking.analytics import (
    MIN_ENGAGEMENT_SCORE_FOR_CONVERSION,
    OfferAnalytics,
    compute_analytics,
    engagement_score,
    is_follow_up_due,
    is_ready_to_convert,
)
from offerdesk.tracking.models import (
    ContentInput,
    ConvertInput,
    FollowUpInput,
    OfferRecord,
    OfferRecordCreate,
    OfferRecordUpdate,
    PerformanceInput,
    RejectInput,
)
from offerdesk.tracking.schema import init_offer_records_table
from offerdesk.tracking.scripts import (
    FollowUpSuggestion,
    conversion_script,
    format_number,
    suggest_follow_up_script,
)
from offerdesk.tracking.store import RecordStore, SQLiteRecordStore
from offerdesk.tracking.tracker import OfferTracker
from offerdesk.tracking.transitions import (
    TERMINAL_STATES,
    TRANSITIONS,
    OfferEvent,
    next_state,
    valid_events,
)

__all__ = [
    "MIN_ENGAGEMENT_SCORE_FOR_CONVERSION",
    "TERMINAL_STATES",
    "TRANSITIONS",
    "ContentInput",
    "ConvertInput",
    "FollowUpInput",
    "FollowUpSuggestion",
    "OfferAnalytics",
    "OfferEvent",
    "OfferRecord",
    "OfferRecordCreate",
    "OfferRecordUpdate",
    "OfferTracker",
    "PerformanceInput",
    "RecordStore",
    "RejectInput",
    "SQLiteRecordStore",
    "compute_analytics",
    "conversion_script",
    "engagement_score",
    "format_number",
    "init_offer_records_table",
    "is_follow_up_due",
    "is_ready_to_convert",
    "next_state",
    "suggest_follow_up_script",
    "valid_events",
]
