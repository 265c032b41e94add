"""Transition map for the offer record lifecycle."""

from enum import StrEnum

from offerdesk.domain.errors import InvalidTransitionError
from offerdesk.domain.types import OfferStatus


class OfferEvent(StrEnum):
    """Holder actions that move an offer record between states."""

    ADD_CONTENT = "add_content"
    LOG_FOLLOW_UP = "log_follow_up"
    MARK_CONVERTED = "mark_converted"
    MARK_REJECTED = "mark_rejected"
    ARCHIVE = "archive"


_OPEN_STATES = (OfferStatus.RECEIVED, OfferStatus.CONTENT_CREATED, OfferStatus.FOLLOWED_UP)

# All valid (current_state, event) -> next_state mappings.
# Any pair not in this dict is an invalid transition.
TRANSITIONS: dict[tuple[OfferStatus, str], OfferStatus] = {
    # Content can be re-attached until a follow-up has gone out
    (OfferStatus.RECEIVED, OfferEvent.ADD_CONTENT): OfferStatus.CONTENT_CREATED,
    (OfferStatus.CONTENT_CREATED, OfferEvent.ADD_CONTENT): OfferStatus.CONTENT_CREATED,
    # Follow-ups need posted content
    (OfferStatus.CONTENT_CREATED, OfferEvent.LOG_FOLLOW_UP): OfferStatus.FOLLOWED_UP,
    (OfferStatus.FOLLOWED_UP, OfferEvent.LOG_FOLLOW_UP): OfferStatus.FOLLOWED_UP,
    **{(state, OfferEvent.MARK_CONVERTED): OfferStatus.CONVERTED for state in _OPEN_STATES},
    **{(state, OfferEvent.MARK_REJECTED): OfferStatus.DECLINED for state in _OPEN_STATES},
    **{
        (state, OfferEvent.ARCHIVE): OfferStatus.ARCHIVED
        for state in (*_OPEN_STATES, OfferStatus.CONVERTED, OfferStatus.DECLINED)
    },
}

# States that reject all events.
TERMINAL_STATES: frozenset[OfferStatus] = frozenset({OfferStatus.ARCHIVED})


def next_state(current: OfferStatus, event: str) -> OfferStatus:
    """Return the state *event* leads to from *current*.

    Raises:
        InvalidTransitionError: If the pair is not in ``TRANSITIONS``.
    """
    key = (current, event)
    if current in TERMINAL_STATES or key not in TRANSITIONS:
        raise InvalidTransitionError(current, event)
    return TRANSITIONS[key]


def valid_events(current: OfferStatus) -> list[str]:
    """Sorted events allowed from *current*; empty for terminal states."""
    return sorted(str(event) for state, event in TRANSITIONS if state == current)
