"""Tests for normalization of untrusted provider output."""

from __future__ import annotations

from decimal import Decimal

import pytest

from offerdesk.domain.errors import MalformedCompletionError
from offerdesk.domain.types import (
    CompensationType,
    ContentFormat,
    ConversionPotential,
    DMTone,
    Exclusivity,
    GiftApproach,
    Platform,
)
from offerdesk.llm.normalize import (
    as_int,
    as_positive_decimal,
    coerce_enum,
    decode_json_object,
    normalize_dm,
    normalize_offer,
)


class TestDecodeJsonObject:
    def test_plain_object(self) -> None:
        assert decode_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_object(self) -> None:
        assert decode_json_object('```json\n{"a": 1}\n```') == {"a": 1}

    @pytest.mark.parametrize(
        "raw",
        ["not json", "[1, 2]", '"text"', ""],
        ids=["prose", "array", "string", "empty"],
    )
    def test_rejects_non_objects(self, raw: str) -> None:
        with pytest.raises(MalformedCompletionError):
            decode_json_object(raw)


class TestCoercion:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("tiktok", Platform.TIKTOK),
            (" YouTube ", Platform.YOUTUBE),
            ("myspace", Platform.INSTAGRAM),
            (None, Platform.INSTAGRAM),
            (42, Platform.INSTAGRAM),
        ],
        ids=["exact", "case_and_space", "unknown", "none", "non_string"],
    )
    def test_coerce_enum(self, value: object, expected: Platform) -> None:
        assert coerce_enum(value, Platform, Platform.INSTAGRAM) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("3", 3), (2.7, 2), (None, 1), ("lots", 1), (-4, 1), (True, 1)],
        ids=["string", "float", "none", "garbage", "negative", "bool"],
    )
    def test_as_int_with_minimum(self, value: object, expected: int) -> None:
        assert as_int(value, minimum=1) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("$1,200", Decimal("1200")),
            (75, Decimal("75")),
            (0, None),
            ("-10", None),
            ("free", None),
            ("NaN", None),
        ],
        ids=["formatted", "int", "zero", "negative", "word", "nan"],
    )
    def test_as_positive_decimal(self, value: object, expected: Decimal | None) -> None:
        assert as_positive_decimal(value) == expected


class TestNormalizeOffer:
    """Brief extraction payloads always normalize to a valid shape."""

    def test_full_payload(self) -> None:
        data = {
            "brand": {"name": "Glow Co", "industry": "beauty", "product": "Serum"},
            "campaign": {"objective": "awareness", "target_audience": "Gen Z"},
            "content": {"platform": "tiktok", "format": "reel", "quantity": 3},
            "usage_rights": {
                "duration_days": 90,
                "exclusivity": "category",
                "paid_amplification": True,
            },
            "timeline": {"deadline": "March 15"},
        }

        offer = normalize_offer(data, raw_text="brief text")

        assert offer.brand.name == "Glow Co"
        assert offer.content.platform == Platform.TIKTOK
        assert offer.content.format == ContentFormat.REEL
        assert offer.content.quantity == 3
        assert offer.usage_rights.duration_days == 90
        assert offer.usage_rights.exclusivity == Exclusivity.CATEGORY
        assert offer.usage_rights.paid_amplification is True
        assert offer.timeline.deadline == "March 15"
        assert offer.raw_text == "brief text"

    def test_empty_payload_gets_defaults(self) -> None:
        offer = normalize_offer({})

        assert offer.brand.name == ""
        assert offer.content.platform == Platform.INSTAGRAM
        assert offer.content.format == ContentFormat.STATIC
        assert offer.content.quantity == 1
        assert offer.usage_rights.duration_days == 0
        assert offer.usage_rights.exclusivity == Exclusivity.NONE

    def test_unknown_enums_and_bad_quantity_coerced(self) -> None:
        data = {
            "content": {"platform": "snapchat", "format": "hologram", "quantity": 0},
            "usage_rights": {"exclusivity": "forever", "duration_days": "n/a"},
        }

        offer = normalize_offer(data)

        assert offer.content.platform == Platform.INSTAGRAM
        assert offer.content.format == ContentFormat.STATIC
        assert offer.content.quantity == 1
        assert offer.usage_rights.exclusivity == Exclusivity.NONE
        assert offer.usage_rights.duration_days == 0

    def test_camel_case_keys_accepted(self) -> None:
        data = {
            "usageRights": {"durationDays": 30, "paidAmplification": "yes"},
            "content": {"creativeDirection": "morning routine"},
        }

        offer = normalize_offer(data)

        assert offer.usage_rights.duration_days == 30
        assert offer.usage_rights.paid_amplification is True
        assert offer.content.creative_direction == "morning routine"

    def test_non_dict_sections_ignored(self) -> None:
        offer = normalize_offer({"brand": "Glow Co", "content": ["reel"]})

        assert offer.brand.name == ""
        assert offer.content.quantity == 1


class TestNormalizeDM:
    def test_gift_offer_payload(self) -> None:
        data = {
            "brand_name": "Glow Co",
            "compensation_type": "gifted",
            "tone": "professional",
            "is_gift_offer": True,
            "gift_analysis": {
                "product_mentioned": "Vitamin C serum",
                "conversion_potential": "high",
                "recommended_approach": "accept_and_convert",
            },
            "green_flags": ["Personalized message", ""],
            "extracted_platform": "instagram",
            "extracted_format": "reel",
        }

        dm = normalize_dm(data)

        assert dm.compensation_type == CompensationType.GIFTED
        assert dm.tone == DMTone.PROFESSIONAL
        assert dm.gift_analysis is not None
        assert dm.gift_analysis.conversion_potential == ConversionPotential.HIGH
        assert dm.gift_analysis.recommended_approach == GiftApproach.ACCEPT_AND_CONVERT
        assert dm.green_flags == ["Personalized message"]
        assert dm.brand is not None
        assert dm.brand.product == "Vitamin C serum"
        assert dm.content is not None
        assert dm.content.format == ContentFormat.REEL
        assert dm.content.quantity == 1

    def test_gift_analysis_dropped_when_not_gift(self) -> None:
        dm = normalize_dm(
            {"is_gift_offer": False, "gift_analysis": {"conversion_potential": "high"}}
        )

        assert dm.gift_analysis is None

    def test_empty_payload_defaults(self) -> None:
        dm = normalize_dm({})

        assert dm.compensation_type == CompensationType.UNCLEAR
        assert dm.tone == DMTone.CASUAL
        assert dm.brand is None
        assert dm.content is None
        assert dm.offered_amount is None
        assert dm.red_flags == []
