"""Models for generated gift-offer replies."""

from decimal import Decimal

from pydantic import BaseModel

from offerdesk.domain.types import Recommendation


class ResponseContext(BaseModel, frozen=True):
    """Personalization values substituted into reply templates.

    Every field is optional; templates fall back to neutral literals.
    """

    brand_name: str | None = None
    product_name: str | None = None
    creator_rate: Decimal | None = None
    hybrid_rate: Decimal | None = None
    content_type: str | None = None


class GeneratedResponse(BaseModel, frozen=True):
    """A ready-to-send reply plus optional follow-up material.

    ``follow_up_reminder`` and ``conversion_script`` are set only for
    ``accept_with_hook`` and ``counter_hybrid``.
    """

    response_type: Recommendation
    message: str
    follow_up_reminder: str | None = None
    conversion_script: str | None = None


class ResponseTypeDescription(BaseModel, frozen=True):
    title: str
    description: str
