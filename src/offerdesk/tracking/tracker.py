"""Lifecycle tracker: the service layer over the record store.

Every mutation loads the holder's record, validates the lifecycle event
against the transition map, applies the field changes, and writes the
record back.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from offerdesk.domain.errors import RecordForbiddenError, RecordNotFoundError
from offerdesk.domain.types import ConversionStatus, OfferStatus, ScriptStage
from offerdesk.tracking.analytics import (
    DEFAULT_FOLLOW_UP_DAYS,
    OfferAnalytics,
    compute_analytics,
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
from offerdesk.tracking.scripts import (
    FollowUpSuggestion,
    conversion_script,
    suggest_follow_up_script,
)
from offerdesk.tracking.store import RecordStore
from offerdesk.tracking.transitions import OfferEvent, next_state

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def append_note(existing: str | None, label: str, text: str | None, when: datetime) -> str | None:
    """Append ``[label YYYY-MM-DD]: text`` to the notes log.

    Returns *existing* unchanged when there is nothing to append.
    """
    if not text:
        return existing
    entry = f"[{label} {when.date().isoformat()}]: {text}"
    return f"{existing}\n\n{entry}" if existing else entry


class OfferTracker:
    """Track gift offers from receipt through conversion.

    Usage::

        tracker = OfferTracker(SQLiteRecordStore(conn))
        record = tracker.create("creator-1", OfferRecordCreate(...))
        tracker.add_content("creator-1", record.id, ContentInput(content_type="reel"))
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the tracker.

        Args:
            store: Owner-scoped record store.
            clock: Returns the current UTC time (injectable for tests).
        """
        self._store = store
        self._clock = clock

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, owner_id: str, data: OfferRecordCreate) -> OfferRecord:
        """Log a newly received offer in the ``received`` state."""
        now = self._clock()
        record = OfferRecord(
            owner_id=owner_id,
            brand_name=data.brand_name,
            brand_handle=data.brand_handle,
            brand_website=data.brand_website,
            brand_followers=data.brand_followers,
            product_description=data.product_description,
            product_value=data.product_value,
            date_received=data.date_received or now,
            notes=data.notes,
            created_at=now,
            updated_at=now,
        )
        self._store.add(record)
        logger.info(
            "offer_record_created",
            owner_id=owner_id,
            record_id=record.id,
            brand=record.brand_name,
        )
        return record

    def get(self, owner_id: str, record_id: str) -> OfferRecord:
        """Fetch one of the holder's records.

        Raises:
            RecordNotFoundError: If no record has this ID.
            RecordForbiddenError: If the record belongs to another holder.
        """
        record = self._store.get(owner_id, record_id)
        if record is not None:
            return record
        if self._store.exists(record_id):
            logger.warning("offer_record_forbidden", owner_id=owner_id, record_id=record_id)
            raise RecordForbiddenError(record_id)
        raise RecordNotFoundError(record_id)

    def list_records(
        self, owner_id: str, status: OfferStatus | None = None
    ) -> list[OfferRecord]:
        return self._store.list_by_owner(owner_id, status)

    def update(self, owner_id: str, record_id: str, data: OfferRecordUpdate) -> OfferRecord:
        """Apply a partial edit of descriptive fields."""
        record = self.get(owner_id, record_id)
        return self._save(record, data.model_dump(exclude_unset=True))

    def delete(self, owner_id: str, record_id: str) -> None:
        """Remove a record permanently.

        Raises:
            RecordNotFoundError: If no record has this ID.
            RecordForbiddenError: If the record belongs to another holder.
        """
        self.get(owner_id, record_id)
        self._store.delete(owner_id, record_id)
        logger.info("offer_record_deleted", owner_id=owner_id, record_id=record_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def add_content(self, owner_id: str, record_id: str, data: ContentInput) -> OfferRecord:
        """Attach posted content and schedule the follow-up 14 days after it."""
        record = self.get(owner_id, record_id)
        content_date = data.content_date or self._clock()
        return self._transition(
            record,
            OfferEvent.ADD_CONTENT,
            {
                "content_type": data.content_type,
                "content_url": data.content_url,
                "content_date": content_date,
                "follow_up_date": content_date + timedelta(days=DEFAULT_FOLLOW_UP_DAYS),
            },
        )

    def add_performance(
        self, owner_id: str, record_id: str, data: PerformanceInput
    ) -> OfferRecord:
        """Record performance metrics; only metrics explicitly provided change."""
        record = self.get(owner_id, record_id)
        return self._save(record, data.model_dump(exclude_unset=True))

    def log_follow_up(self, owner_id: str, record_id: str, data: FollowUpInput) -> OfferRecord:
        record = self.get(owner_id, record_id)
        return self._transition(
            record,
            OfferEvent.LOG_FOLLOW_UP,
            {
                "follow_up_sent": True,
                "conversion_status": ConversionStatus.ATTEMPTING,
                "notes": append_note(record.notes, "Follow-up", data.notes, self._clock()),
            },
        )

    def mark_converted(self, owner_id: str, record_id: str, data: ConvertInput) -> OfferRecord:
        record = self.get(owner_id, record_id)
        now = self._clock()
        return self._transition(
            record,
            OfferEvent.MARK_CONVERTED,
            {
                "conversion_status": ConversionStatus.CONVERTED,
                "converted_amount": data.converted_amount,
                "converted_deal_id": data.converted_deal_id,
                "resolved_at": now,
                "notes": append_note(record.notes, "Converted", data.notes, now),
            },
        )

    def mark_rejected(self, owner_id: str, record_id: str, data: RejectInput) -> OfferRecord:
        record = self.get(owner_id, record_id)
        now = self._clock()
        return self._transition(
            record,
            OfferEvent.MARK_REJECTED,
            {
                "conversion_status": ConversionStatus.REJECTED,
                "resolved_at": now,
                "notes": append_note(record.notes, "Declined", data.notes, now),
            },
        )

    def archive(self, owner_id: str, record_id: str) -> OfferRecord:
        record = self.get(owner_id, record_id)
        return self._transition(record, OfferEvent.ARCHIVE, {})

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def by_status(self, owner_id: str, status: OfferStatus) -> list[OfferRecord]:
        return self._store.list_by_owner(owner_id, status)

    def ready_to_convert(self, owner_id: str) -> list[OfferRecord]:
        """Records with live content, no follow-up yet, and strong engagement."""
        return self._store.list_where(owner_id, is_ready_to_convert)

    def follow_ups_due(self, owner_id: str) -> list[OfferRecord]:
        return self._store.list_follow_ups_due(owner_id, self._clock())

    def analytics(self, owner_id: str) -> OfferAnalytics:
        return compute_analytics(self._store.list_by_owner(owner_id), self._clock())

    def conversion_script(self, owner_id: str, record_id: str, stage: ScriptStage) -> str:
        return conversion_script(self.get(owner_id, record_id), stage)

    def suggest_follow_up(self, owner_id: str, record_id: str) -> FollowUpSuggestion:
        return suggest_follow_up_script(self.get(owner_id, record_id), self._clock())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _transition(
        self, record: OfferRecord, event: OfferEvent, changes: dict[str, Any]
    ) -> OfferRecord:
        new_status = next_state(record.status, event)
        updated = self._save(record, {**changes, "status": new_status})
        logger.info(
            "offer_record_transition",
            owner_id=record.owner_id,
            record_id=record.id,
            from_state=record.status,
            event=event,
            to_state=new_status,
        )
        return updated

    def _save(self, record: OfferRecord, changes: dict[str, Any]) -> OfferRecord:
        # Re-validate so the stored record always satisfies the model constraints
        updated = OfferRecord.model_validate(
            {**record.model_dump(), **changes, "updated_at": self._clock()}
        )
        self._store.update(updated)
        return updated
