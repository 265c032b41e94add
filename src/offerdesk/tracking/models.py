"""Pydantic models for tracked offer records and their lifecycle inputs."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from offerdesk.domain.types import ContentFormat, ConversionStatus, OfferStatus


def _as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def new_record_id() -> str:
    return uuid4().hex


class OfferRecord(BaseModel):
    """A holder-owned offer tracked from receipt to resolution.

    ``status`` only changes through lifecycle events (see
    ``offerdesk.tracking.transitions``).  ``notes`` is an append-only log.
    """

    id: str = Field(default_factory=new_record_id)
    owner_id: str = Field(min_length=1)

    brand_name: str
    brand_handle: str | None = None
    brand_website: str | None = None
    brand_followers: int | None = Field(default=None, ge=0)
    product_description: str
    product_value: Decimal = Field(ge=0)
    date_received: datetime

    status: OfferStatus = OfferStatus.RECEIVED

    content_type: ContentFormat | None = None
    content_url: str | None = None
    content_date: datetime | None = None

    views: int | None = Field(default=None, ge=0)
    likes: int | None = Field(default=None, ge=0)
    comments: int | None = Field(default=None, ge=0)
    saves: int | None = Field(default=None, ge=0)
    shares: int | None = Field(default=None, ge=0)

    conversion_status: ConversionStatus | None = None
    converted_deal_id: str | None = None
    converted_amount: Decimal | None = Field(default=None, ge=0)
    resolved_at: datetime | None = None

    follow_up_date: datetime | None = None
    follow_up_sent: bool = False

    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator(
        "date_received",
        "content_date",
        "resolved_at",
        "follow_up_date",
        "created_at",
        "updated_at",
    )
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class OfferRecordCreate(BaseModel):
    """Fields a holder supplies when logging a received offer."""

    brand_name: str = Field(min_length=1)
    brand_handle: str | None = None
    brand_website: str | None = None
    brand_followers: int | None = Field(default=None, ge=0)
    product_description: str = Field(min_length=1)
    product_value: Decimal = Field(ge=0)
    date_received: datetime | None = None
    notes: str | None = None

    @field_validator("date_received")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class OfferRecordUpdate(BaseModel):
    """Partial edit of descriptive fields; only fields explicitly set are applied.

    Status, notes, and conversion fields are excluded; they change only
    through lifecycle events.
    """

    brand_name: str | None = Field(default=None, min_length=1)
    brand_handle: str | None = None
    brand_website: str | None = None
    brand_followers: int | None = Field(default=None, ge=0)
    product_description: str | None = Field(default=None, min_length=1)
    product_value: Decimal | None = Field(default=None, ge=0)
    date_received: datetime | None = None
    content_url: str | None = None

    @field_validator("date_received")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class ContentInput(BaseModel):
    content_type: ContentFormat
    content_url: str | None = None
    content_date: datetime | None = None

    @field_validator("content_date")
    @classmethod
    def normalize_timezone(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class PerformanceInput(BaseModel):
    """Performance metrics for posted content; unset metrics are left unchanged."""

    views: int | None = Field(default=None, ge=0)
    likes: int | None = Field(default=None, ge=0)
    comments: int | None = Field(default=None, ge=0)
    saves: int | None = Field(default=None, ge=0)
    shares: int | None = Field(default=None, ge=0)


class FollowUpInput(BaseModel):
    notes: str | None = None


class ConvertInput(BaseModel):
    converted_amount: Decimal = Field(ge=0)
    converted_deal_id: str | None = None
    notes: str | None = None


class RejectInput(BaseModel):
    notes: str | None = None
