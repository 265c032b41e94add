"""Shared pytest fixtures for the offer pipeline test suite."""

import sqlite3
from collections.abc import Iterator
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from offerdesk.domain.models import GiftOfferInput, HolderProfile
from offerdesk.domain.types import BrandQuality, ContentRequired, CreatorTier
from offerdesk.tracking import OfferTracker, SQLiteRecordStore, init_offer_records_table

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for lifecycle tests."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def micro_profile() -> HolderProfile:
    """A micro-tier holder with no measurable audience value."""
    return HolderProfile(tier=CreatorTier.MICRO)


@pytest.fixture
def audience_profile() -> HolderProfile:
    """A mid-tier holder with 40k reach at 5% engagement."""
    return HolderProfile(
        tier=CreatorTier.MID,
        total_reach=40_000,
        avg_engagement_rate=5.0,
        niches=["beauty", "skincare"],
    )


@pytest.fixture
def strong_gift() -> GiftOfferInput:
    """A gift from a major brand with every positive signal."""
    return GiftOfferInput(
        product_description="Serum set",
        product_value=Decimal("300"),
        content_required=ContentRequired.DEDICATED_POST,
        estimated_hours=Decimal("1"),
        brand_quality=BrandQuality.MAJOR_BRAND,
        would_buy=True,
        has_website=True,
        prior_creator_collabs=True,
    )


@pytest.fixture
def records_conn() -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    init_offer_records_table(conn)
    yield conn
    conn.close()


@pytest.fixture
def store(records_conn: sqlite3.Connection) -> SQLiteRecordStore:
    return SQLiteRecordStore(records_conn)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(store: SQLiteRecordStore, clock: FakeClock) -> OfferTracker:
    return OfferTracker(store, clock=clock)
