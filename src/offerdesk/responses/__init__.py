"""Ready-to-send replies for evaluated gift offers."""

from offerdesk.responses.generator import (
    conversion_playbook_script,
    describe_response_type,
    generate_response,
    generate_response_by_type,
)
from offerdesk.responses.models import (
    GeneratedResponse,
    ResponseContext,
    ResponseTypeDescription,
)

__all__ = [
    "GeneratedResponse",
    "ResponseContext",
    "ResponseTypeDescription",
    "conversion_playbook_script",
    "describe_response_type",
    "generate_response",
    "generate_response_by_type",
]
