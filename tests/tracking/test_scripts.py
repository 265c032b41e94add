"""Tests for record-tailored conversion scripts."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from offerdesk.domain.types import ScriptStage
from offerdesk.tracking import (
    OfferRecord,
    conversion_script,
    format_number,
    suggest_follow_up_script,
)

NOW = datetime(2025, 3, 1, tzinfo=UTC)


def record(**overrides) -> OfferRecord:
    fields = {
        "owner_id": "creator-1",
        "brand_name": "Glow Co",
        "product_description": "the vitamin C serum",
        "product_value": Decimal("85"),
        "date_received": NOW,
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return OfferRecord(**fields)


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0"), (999, "999"), (1_000, "1.0K"), (12_500, "12.5K"), (3_400_000, "3.4M")],
        ids=["zero", "hundreds", "one_k", "thousands", "millions"],
    )
    def test_format_number(self, value: int, expected: str):
        assert format_number(value) == expected


class TestConversionScript:
    def test_performance_placeholders_filled(self):
        script = conversion_script(
            record(views=12_500, likes=830), ScriptStage.PERFORMANCE_SHARE
        )

        assert script.startswith("Hi Glow Co!")
        assert "- 12.5K views" in script
        assert "- 830 likes" in script
        assert "- 0 saves" in script

    def test_placeholders_kept_without_views(self):
        script = conversion_script(record(), ScriptStage.PERFORMANCE_SHARE)
        assert "[X] views" in script

    def test_other_stage_uses_product(self):
        script = conversion_script(record(views=100), ScriptStage.FOLLOW_UP_30_DAY)
        assert "using the vitamin C serum for a month" in script


class TestSuggestFollowUp:
    def test_no_content_yet(self):
        suggestion = suggest_follow_up_script(record(), NOW)

        assert suggestion.stage == ScriptStage.PERFORMANCE_SHARE
        assert suggestion.reason.startswith("Content not yet posted")

    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (0, ScriptStage.PERFORMANCE_SHARE),
            (13, ScriptStage.PERFORMANCE_SHARE),
            (14, ScriptStage.FOLLOW_UP_30_DAY),
            (44, ScriptStage.FOLLOW_UP_30_DAY),
            (45, ScriptStage.RETURNING_BRAND_OFFER),
        ],
        ids=["same_day", "day_13", "day_14", "day_44", "day_45"],
    )
    def test_stage_by_days_since_content(self, days: int, expected: ScriptStage):
        posted = record(content_date=NOW - timedelta(days=days))
        assert suggest_follow_up_script(posted, NOW).stage == expected
