"""Tests for tier tables and rate lookups."""

from decimal import Decimal

import pytest

from offerdesk.domain.types import (
    DEFAULT_TIER,
    HOURLY_RATES,
    CreatorTier,
    get_base_rate,
    get_hourly_rate,
)


class TestHourlyRates:
    """Every tier maps to an hourly rate; unknown tiers use the default."""

    @pytest.mark.parametrize(
        ("tier", "expected"),
        [
            ("nano", Decimal("30")),
            ("micro", Decimal("50")),
            ("mid", Decimal("75")),
            ("rising", Decimal("100")),
            ("macro", Decimal("125")),
            ("mega", Decimal("150")),
            ("celebrity", Decimal("200")),
        ],
        ids=["nano", "micro", "mid", "rising", "macro", "mega", "celebrity"],
    )
    def test_known_tiers(self, tier: str, expected: Decimal) -> None:
        assert get_hourly_rate(tier) == expected

    def test_every_tier_has_a_rate(self) -> None:
        assert set(HOURLY_RATES) == set(CreatorTier)

    def test_unknown_tier_falls_back_to_default(self) -> None:
        assert get_hourly_rate("galactic") == HOURLY_RATES[DEFAULT_TIER]

    def test_default_tier_is_micro(self) -> None:
        assert DEFAULT_TIER == CreatorTier.MICRO


class TestBaseRates:
    def test_base_rate_lookup(self) -> None:
        assert get_base_rate(CreatorTier.NANO) == Decimal("150")
        assert get_base_rate("celebrity") == Decimal("12000")

    def test_unknown_tier_uses_micro_base_rate(self) -> None:
        assert get_base_rate("") == Decimal("400")
