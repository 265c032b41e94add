"""Normalization of untrusted provider output into canonical models.

Nothing in this module raises for bad input: every enum is checked against
its allow-list with a fixed default, missing strings become ``""``, missing
numbers become ``0``, and quantity is floored at 1.  Keys are accepted in
both snake_case and camelCase because providers do not always honor the
requested spelling.
"""

from __future__ import annotations

import json
import re
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any, TypeVar

from offerdesk.domain.errors import MalformedCompletionError
from offerdesk.domain.models import (
    BrandInfo,
    CampaignIntent,
    ContentSpec,
    StructuredOffer,
    Timeline,
    UsageRights,
)
from offerdesk.domain.types import (
    CompensationType,
    ContentExpectation,
    ContentFormat,
    ConversionPotential,
    DMTone,
    DMUrgency,
    Exclusivity,
    GiftApproach,
    Platform,
)
from offerdesk.llm.models import DMExtraction, GiftSignal

E = TypeVar("E", bound=StrEnum)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)
_CAMEL_RE = re.compile(r"_([a-z])")


def decode_json_object(raw: str) -> dict[str, Any]:
    """Decode a provider's raw text into a JSON object.

    Markdown code fences around the payload are tolerated.

    Raises:
        MalformedCompletionError: If the text is not a JSON object.
    """
    text = raw.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedCompletionError(f"Provider returned non-JSON payload: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedCompletionError(
            f"Provider returned {type(data).__name__}, expected a JSON object"
        )
    return data


def _camel(key: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), key)


def _get(data: dict[str, Any], key: str) -> Any:
    """Read *key* in snake_case, falling back to its camelCase spelling."""
    if key in data:
        return data[key]
    return data.get(_camel(key))


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = _get(data, key)
    return value if isinstance(value, dict) else {}


def coerce_enum(value: Any, enum_cls: type[E], default: E) -> E:
    """Map *value* onto *enum_cls*, or return *default* when it is not allowed."""
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default


def as_str(value: Any) -> str:
    """Coerce a scalar to a stripped string; anything else becomes ``""``."""
    if value is None or isinstance(value, (bool, dict, list)):
        return ""
    return str(value).strip()


def as_optional_str(value: Any) -> str | None:
    """Like ``as_str`` but empty results become ``None``."""
    return as_str(value) or None


def as_int(value: Any, minimum: int = 0) -> int:
    """Coerce *value* to an int no smaller than *minimum*; garbage becomes *minimum*."""
    if isinstance(value, bool):
        return minimum
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return minimum
    return max(minimum, number)


def as_bool(value: Any) -> bool:
    """Coerce booleans, including the string spellings providers emit."""
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1"}
    return bool(value)


def as_positive_decimal(value: Any) -> Decimal | None:
    """Coerce a monetary amount; zero, negative, or unparseable becomes ``None``."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).replace("$", "").replace(",", "").strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount


def as_str_list(value: Any) -> list[str]:
    """Coerce a list of flags to non-empty strings."""
    if not isinstance(value, list):
        return []
    return [s for s in (as_str(item) for item in value) if s]


def normalize_offer(data: dict[str, Any], raw_text: str = "") -> StructuredOffer:
    """Normalize a decoded brief-extraction payload into a ``StructuredOffer``.

    Args:
        data: The provider's decoded JSON object.
        raw_text: The original text, carried through unchanged.

    Returns:
        A ``StructuredOffer`` whose enum fields are always allow-listed.
    """
    brand = _section(data, "brand")
    campaign = _section(data, "campaign")
    content = _section(data, "content")
    usage_rights = _section(data, "usage_rights")
    timeline = _section(data, "timeline")

    return StructuredOffer(
        brand=BrandInfo(
            name=as_str(_get(brand, "name")),
            industry=as_str(_get(brand, "industry")),
            product=as_str(_get(brand, "product")),
        ),
        campaign=CampaignIntent(
            objective=as_str(_get(campaign, "objective")),
            target_audience=as_str(_get(campaign, "target_audience")),
            budget_range=as_str(_get(campaign, "budget_range")),
        ),
        content=ContentSpec(
            platform=coerce_enum(_get(content, "platform"), Platform, Platform.INSTAGRAM),
            format=coerce_enum(_get(content, "format"), ContentFormat, ContentFormat.STATIC),
            quantity=as_int(_get(content, "quantity"), minimum=1),
            creative_direction=as_str(_get(content, "creative_direction")),
        ),
        usage_rights=UsageRights(
            duration_days=as_int(_get(usage_rights, "duration_days")),
            exclusivity=coerce_enum(
                _get(usage_rights, "exclusivity"), Exclusivity, Exclusivity.NONE
            ),
            paid_amplification=as_bool(_get(usage_rights, "paid_amplification")),
        ),
        timeline=Timeline(deadline=as_str(_get(timeline, "deadline"))),
        raw_text=raw_text,
    )


def _normalize_gift_signal(data: dict[str, Any]) -> GiftSignal:
    return GiftSignal(
        product_mentioned=as_optional_str(_get(data, "product_mentioned")),
        content_expectation=coerce_enum(
            _get(data, "content_expectation"), ContentExpectation, ContentExpectation.IMPLIED
        ),
        conversion_potential=coerce_enum(
            _get(data, "conversion_potential"), ConversionPotential, ConversionPotential.MEDIUM
        ),
        recommended_approach=coerce_enum(
            _get(data, "recommended_approach"), GiftApproach, GiftApproach.ASK_BUDGET
        ),
    )


def normalize_dm(data: dict[str, Any]) -> DMExtraction:
    """Normalize a decoded DM-analysis payload into a ``DMExtraction``.

    Gift analysis is kept only when the payload also flags a gift offer.  The
    structured brand and content blocks are filled only when the payload
    mentions them.
    """
    is_gift_offer = as_bool(_get(data, "is_gift_offer"))
    gift_raw = _section(data, "gift_analysis")
    gift_analysis = _normalize_gift_signal(gift_raw) if is_gift_offer and gift_raw else None

    brand_name = as_optional_str(_get(data, "brand_name"))
    brand = None
    if brand_name:
        product = gift_analysis.product_mentioned if gift_analysis else None
        brand = BrandInfo(name=brand_name, product=product or "")

    platform = coerce_enum(
        _get(data, "extracted_platform"), Platform, None  # type: ignore[arg-type]
    )
    content_format = coerce_enum(
        _get(data, "extracted_format"), ContentFormat, None  # type: ignore[arg-type]
    )
    quantity = as_int(_get(data, "extracted_quantity"))
    content = None
    if platform or content_format or quantity:
        content = ContentSpec(
            platform=platform or Platform.INSTAGRAM,
            format=content_format or ContentFormat.STATIC,
            quantity=max(1, quantity),
        )

    return DMExtraction(
        brand_name=brand_name,
        brand_handle=as_optional_str(_get(data, "brand_handle")),
        deliverable_request=as_optional_str(_get(data, "deliverable_request")),
        compensation_type=coerce_enum(
            _get(data, "compensation_type"), CompensationType, CompensationType.UNCLEAR
        ),
        offered_amount=as_positive_decimal(_get(data, "offered_amount")),
        estimated_product_value=as_positive_decimal(_get(data, "estimated_product_value")),
        tone=coerce_enum(_get(data, "tone"), DMTone, DMTone.CASUAL),
        urgency=coerce_enum(_get(data, "urgency"), DMUrgency, DMUrgency.LOW),
        red_flags=as_str_list(_get(data, "red_flags")),
        green_flags=as_str_list(_get(data, "green_flags")),
        is_gift_offer=is_gift_offer,
        gift_analysis=gift_analysis,
        brand=brand,
        content=content,
    )
