"""Reply templates for gift offers and the conversion playbook.

Each recommendation maps to exactly one template.  Templates substitute
brand and product names from the ``ResponseContext`` and fall back to
"there" and "the product" when they are missing.
"""

from decimal import ROUND_HALF_UP, Decimal

from offerdesk.domain.types import Recommendation, ScriptStage
from offerdesk.evaluation.boundaries import format_money
from offerdesk.evaluation.models import OfferEvaluation
from offerdesk.responses.models import (
    GeneratedResponse,
    ResponseContext,
    ResponseTypeDescription,
)

BRAND_FALLBACK = "there"
PRODUCT_FALLBACK = "the product"
CONTENT_TYPE_FALLBACK = "dedicated content"

DEFAULT_CREATOR_RATE = Decimal("500")
HYBRID_SHARE = Decimal("0.5")
MULTI_POST_MULTIPLIER = Decimal("1.8")


def _names(context: ResponseContext) -> tuple[str, str]:
    return (
        context.brand_name or BRAND_FALLBACK,
        context.product_name or PRODUCT_FALLBACK,
    )


def _whole(amount: Decimal) -> Decimal:
    return amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def _accept_with_hook(context: ResponseContext) -> GeneratedResponse:
    brand, product = _names(context)
    message = (
        f"Hi {brand}! Thanks for reaching out - I'd love to try {product}!\n\n"
        "I'm happy to share my honest experience with my audience. If the content "
        "performs well, I'd love to discuss a paid partnership for future campaigns!\n\n"
        "Where should I send my shipping info?"
    )
    script = (
        f"Hi {brand}! Wanted to share - the content featuring {product} performed great!\n\n"
        "Results:\n"
        "- [X] views\n"
        "- [Y] likes\n"
        "- [Z] saves\n\n"
        "My audience loved it! I'd love to discuss a paid partnership for future "
        "campaigns. Here's my rate card: [link]\n\n"
        "Let me know if you'd like to collaborate again!"
    )
    return GeneratedResponse(
        response_type=Recommendation.ACCEPT_WITH_HOOK,
        message=message,
        follow_up_reminder=(
            "Set a reminder for 2 weeks after posting to share performance metrics "
            "and pitch paid collaboration."
        ),
        conversion_script=script,
    )


def _counter_hybrid(context: ResponseContext) -> GeneratedResponse:
    brand, product = _names(context)
    full_rate = context.creator_rate or DEFAULT_CREATOR_RATE
    hybrid_rate = context.hybrid_rate or _whole(full_rate * HYBRID_SHARE)
    content_type = context.content_type or CONTENT_TYPE_FALLBACK

    message = (
        f"Hi {brand}! Thank you for thinking of me - {product} looks amazing!\n\n"
        f"For {content_type}, my rate is typically ${format_money(full_rate)}. "
        "I'd be happy to do a hybrid collaboration:\n\n"
        f"-> Product gifted + ${format_money(hybrid_rate)} = {content_type} "
        "with my authentic review\n\n"
        "This lets me create the high-quality content your brand deserves. "
        "Would that work with your budget?"
    )
    script = (
        f"Hi {brand}! The collaboration was so much fun, and my audience responded "
        f"really well to {product}!\n\n"
        "For our next campaign, I'd love to do a fully paid partnership. Based on the "
        "results we got, I think we could create even more impactful content together."
        "\n\nMy rates are:\n"
        f"- Single post: ${format_money(full_rate)}\n"
        f"- Multiple posts: ${format_money(_whole(full_rate * MULTI_POST_MULTIPLIER))}\n"
        "- Full campaign: Let's chat!\n\n"
        "Would you be interested in discussing a paid partnership?"
    )
    return GeneratedResponse(
        response_type=Recommendation.COUNTER_HYBRID,
        message=message,
        follow_up_reminder=(
            "If they accept the hybrid deal, track the offer and follow up after "
            "posting with performance metrics."
        ),
        conversion_script=script,
    )


def _ask_budget_first(context: ResponseContext) -> GeneratedResponse:
    brand, _ = _names(context)
    return GeneratedResponse(
        response_type=Recommendation.ASK_BUDGET_FIRST,
        message=(
            f"Hi {brand}! Thanks for reaching out!\n\n"
            "Before I confirm, I have a few quick questions:\n"
            "1. What's the retail value of the product?\n"
            "2. What deliverables are you hoping for?\n"
            "3. Is there a budget for this partnership, or is it product-only?\n\n"
            "Looking forward to hearing more!"
        ),
    )


def _decline_politely(context: ResponseContext) -> GeneratedResponse:
    return GeneratedResponse(
        response_type=Recommendation.DECLINE_POLITELY,
        message=(
            "Thanks so much for thinking of me!\n\n"
            "I'm currently focused on paid partnerships, but I appreciate you reaching "
            "out. If you have budget for a collaboration in the future, I'd love to chat!"
            "\n\nBest of luck with your campaign!"
        ),
    )


def _run_away(context: ResponseContext) -> GeneratedResponse:
    return GeneratedResponse(
        response_type=Recommendation.RUN_AWAY,
        message=(
            "Thank you for reaching out, but I don't think this is the right fit for "
            "me at this time.\n\nBest of luck with your campaign!"
        ),
    )


_TEMPLATES = {
    Recommendation.ACCEPT_WITH_HOOK: _accept_with_hook,
    Recommendation.COUNTER_HYBRID: _counter_hybrid,
    Recommendation.ASK_BUDGET_FIRST: _ask_budget_first,
    Recommendation.DECLINE_POLITELY: _decline_politely,
    Recommendation.RUN_AWAY: _run_away,
}

_DESCRIPTIONS: dict[Recommendation, ResponseTypeDescription] = {
    Recommendation.ACCEPT_WITH_HOOK: ResponseTypeDescription(
        title="Accept & Position for Paid",
        description=(
            "Accept the gift and share genuinely, while planting seeds for a future "
            "paid partnership."
        ),
    ),
    Recommendation.COUNTER_HYBRID: ResponseTypeDescription(
        title="Counter with Hybrid Offer",
        description=(
            "Ask for product + reduced payment to make the deal worthwhile for both parties."
        ),
    ),
    Recommendation.ASK_BUDGET_FIRST: ResponseTypeDescription(
        title="Ask Clarifying Questions",
        description=(
            "Get more information about their budget and expectations before committing."
        ),
    ),
    Recommendation.DECLINE_POLITELY: ResponseTypeDescription(
        title="Politely Decline",
        description="Pass on this opportunity but keep the door open for future paid work.",
    ),
    Recommendation.RUN_AWAY: ResponseTypeDescription(
        title="Decline (Red Flags)",
        description="Red flags detected. Politely disengage without leaving the door open.",
    ),
}


def generate_response_by_type(
    response_type: Recommendation, context: ResponseContext
) -> GeneratedResponse:
    """Render the template for *response_type* regardless of any evaluation."""
    return _TEMPLATES[response_type](context)


def generate_response(
    evaluation: OfferEvaluation, context: ResponseContext | None = None
) -> GeneratedResponse:
    """Render the reply matching an evaluation's recommendation.

    When the context carries no hybrid rate, the evaluation's minimum
    acceptable add-on is used for the hybrid counter.

    Args:
        evaluation: Result of ``evaluate_offer``.
        context: Optional personalization values.

    Returns:
        The generated reply.
    """
    context = context or ResponseContext()
    if context.hybrid_rate is None and evaluation.minimum_acceptable_add_on > 0:
        context = context.model_copy(
            update={"hybrid_rate": evaluation.minimum_acceptable_add_on}
        )
    return generate_response_by_type(evaluation.recommendation, context)


def describe_response_type(response_type: Recommendation) -> ResponseTypeDescription:
    """Short title and description of a response type, for display."""
    return _DESCRIPTIONS[response_type]


def conversion_playbook_script(stage: ScriptStage, context: ResponseContext) -> str:
    """Message for one stage of the gift-to-paid conversion playbook.

    Performance placeholders (``[X]``, ``[Y]``, ``[Z]``) are left for the
    caller to fill in.
    """
    brand, product = _names(context)

    if stage == ScriptStage.PERFORMANCE_SHARE:
        return (
            f"Hi {brand}! Wanted to share - the content featuring {product} performed great!\n\n"
            "Results:\n"
            "- [X] views\n"
            "- [Y] likes\n"
            "- [Z] saves\n\n"
            "My audience loved it! I'd love to discuss a paid partnership for future "
            "campaigns. Here's my rate card: [link]"
        )
    if stage == ScriptStage.FOLLOW_UP_30_DAY:
        return (
            f"Hi {brand}! I've been using {product} for a month now and still loving it!"
            "\n\nI noticed you have some exciting things coming up. I'd love to be part "
            "of your next campaign - I offer a 15% returning brand discount.\n\n"
            "Would you be interested in discussing a paid collaboration?"
        )
    if stage == ScriptStage.NEW_LAUNCH_PITCH:
        return (
            f"Hi {brand}! I saw you're launching [new product] - congrats!\n\n"
            f"Since my audience responded so well to {product}, I think they'd love the "
            "new launch too. I'd be happy to create some content around it.\n\n"
            "For returning brands, I offer a 15% discount on my standard rates. "
            "Would you like to discuss?"
        )
    return (
        f"Hi {brand}! It's been great working with you, and I'd love to continue our "
        "partnership!\n\n"
        "For returning brands, I offer:\n"
        "- 15% discount on standard rates\n"
        "- Priority scheduling\n"
        "- Bundle discounts for multi-post campaigns\n\n"
        "Here's my updated rate card: [link]\n\n"
        "Let me know if you'd like to plan something for the upcoming season!"
    )
