"""Transaction lifecycle states and webhook event mapping.

Trustap runs two transaction flows:

* **Online** (``basic_tx.*`` webhooks) -- the seller ships the item and the
  buyer confirms delivery.
* **Face-to-face** (``p2p_tx.*`` webhooks) -- the buyer pays a deposit and the
  parties confirm the handover in person.

For each flow this module provides a state enum, a read-only transition
table and a mapping from webhook event codes to the state the transaction is
in after the event. The tables describe the lifecycle; nothing here enforces
transitions or stores state.

Example::

    state = map_webhook_to_online_state("basic_tx.paid")  # OnlineTransactionState.PAID
    is_valid_online_transition(state, OnlineTransactionState.TRACKED)  # True
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, TypeVar, Union

_State = TypeVar("_State", bound=enum.Enum)


class OnlineTransactionState(str, enum.Enum):
    """States of an online (shipped) transaction."""

    CREATED = "created"
    JOINED = "joined"
    REJECTED = "rejected"
    PAID = "paid"
    CANCELLED = "cancelled"
    CANCELLED_WITH_PAYMENT = "cancelled_with_payment"
    PAYMENT_REFUNDED = "payment_refunded"
    TRACKED = "tracked"
    DELIVERED = "delivered"
    COMPLAINED = "complained"
    COMPLAINT_PERIOD_ENDED = "complaint_period_ended"
    FUNDS_RELEASED = "funds_released"


class F2FTransactionState(str, enum.Enum):
    """States of a face-to-face transaction."""

    CREATED = "created"
    JOINED = "joined"
    REJECTED = "rejected"
    DEPOSIT_PAID = "deposit_paid"
    CANCELLED = "cancelled"
    DEPOSIT_ACCEPTED = "deposit_accepted"
    REMAINDER_SKIPPED = "remainder_skipped"
    CANCELLED_WITH_DEPOSIT = "cancelled_with_deposit"
    DEPOSIT_REFUNDED = "deposit_refunded"
    BUYER_HANDOVER_CONFIRMED = "buyer_handover_confirmed"
    SELLER_HANDOVER_CONFIRMED = "seller_handover_confirmed"
    COMPLAINED = "complained"
    FUNDS_RELEASED = "funds_released"
    COMPLAINT_PERIOD_ENDED = "complaint_period_ended"


_O = OnlineTransactionState
_F = F2FTransactionState


# --- Transition tables ---

ONLINE_STATE_TRANSITIONS: Mapping[OnlineTransactionState, frozenset[OnlineTransactionState]] = (
    MappingProxyType({
        _O.CREATED: frozenset({_O.JOINED, _O.CANCELLED}),
        _O.JOINED: frozenset({_O.CANCELLED, _O.PAID}),
        _O.REJECTED: frozenset(),
        _O.PAID: frozenset({_O.TRACKED, _O.CANCELLED_WITH_PAYMENT}),
        _O.CANCELLED: frozenset(),
        _O.CANCELLED_WITH_PAYMENT: frozenset({_O.PAYMENT_REFUNDED}),
        _O.PAYMENT_REFUNDED: frozenset(),
        _O.TRACKED: frozenset({_O.DELIVERED}),
        _O.DELIVERED: frozenset({_O.FUNDS_RELEASED, _O.COMPLAINED, _O.COMPLAINT_PERIOD_ENDED}),
        _O.COMPLAINED: frozenset({_O.FUNDS_RELEASED, _O.PAYMENT_REFUNDED}),
        _O.COMPLAINT_PERIOD_ENDED: frozenset({_O.FUNDS_RELEASED}),
        _O.FUNDS_RELEASED: frozenset(),
    })
)

# REJECTED has no documented lifecycle position; it is reachable from CREATED
# only because a p2p_tx.rejected webhook exists.
F2F_STATE_TRANSITIONS: Mapping[F2FTransactionState, frozenset[F2FTransactionState]] = (
    MappingProxyType({
        _F.CREATED: frozenset({_F.JOINED, _F.REJECTED, _F.CANCELLED}),
        _F.JOINED: frozenset({_F.CANCELLED, _F.DEPOSIT_PAID}),
        _F.REJECTED: frozenset(),
        _F.DEPOSIT_PAID: frozenset(
            {_F.DEPOSIT_ACCEPTED, _F.CANCELLED_WITH_DEPOSIT, _F.REMAINDER_SKIPPED}
        ),
        _F.CANCELLED: frozenset(),
        _F.DEPOSIT_ACCEPTED: frozenset({_F.REMAINDER_SKIPPED, _F.CANCELLED_WITH_DEPOSIT}),
        _F.REMAINDER_SKIPPED: frozenset(
            {_F.BUYER_HANDOVER_CONFIRMED, _F.SELLER_HANDOVER_CONFIRMED, _F.COMPLAINED}
        ),
        _F.CANCELLED_WITH_DEPOSIT: frozenset({_F.DEPOSIT_REFUNDED}),
        _F.DEPOSIT_REFUNDED: frozenset(),
        _F.BUYER_HANDOVER_CONFIRMED: frozenset({_F.COMPLAINED, _F.COMPLAINT_PERIOD_ENDED}),
        _F.SELLER_HANDOVER_CONFIRMED: frozenset(
            {_F.COMPLAINED, _F.COMPLAINT_PERIOD_ENDED, _F.FUNDS_RELEASED}
        ),
        _F.COMPLAINED: frozenset({_F.FUNDS_RELEASED}),
        _F.FUNDS_RELEASED: frozenset(),
        _F.COMPLAINT_PERIOD_ENDED: frozenset({_F.FUNDS_RELEASED}),
    })
)


# --- Webhook event codes ---

ONLINE_WEBHOOK_STATES: Mapping[str, OnlineTransactionState] = MappingProxyType({
    "basic_tx.joined": _O.JOINED,
    "basic_tx.rejected": _O.REJECTED,
    "basic_tx.cancelled": _O.CANCELLED,
    "basic_tx.claimed": _O.CREATED,
    "basic_tx.listing_transaction_accepted": _O.JOINED,
    "basic_tx.listing_transaction_rejected": _O.REJECTED,
    "basic_tx.payment_failed": _O.CREATED,
    "basic_tx.paid": _O.PAID,
    "basic_tx.payment_refunded": _O.PAYMENT_REFUNDED,
    "basic_tx.payment_review_flagged": _O.PAID,
    "basic_tx.payment_review_finished": _O.PAID,
    "basic_tx.tracking_details_submission_deadline_extended": _O.TRACKED,
    "basic_tx.tracked": _O.TRACKED,
    "basic_tx.delivered": _O.DELIVERED,
    "basic_tx.complained": _O.COMPLAINED,
    "basic_tx.complaint_period_ended": _O.COMPLAINT_PERIOD_ENDED,
    "basic_tx.funds_released": _O.FUNDS_RELEASED,
    "basic_tx.funds_refunded": _O.PAYMENT_REFUNDED,
})

F2F_WEBHOOK_STATES: Mapping[str, F2FTransactionState] = MappingProxyType({
    "p2p_tx.joined": _F.JOINED,
    "p2p_tx.rejected": _F.REJECTED,
    "p2p_tx.cancelled": _F.CANCELLED,
    "p2p_tx.claimed": _F.CREATED,
    "p2p_tx.deposit_payment_failed": _F.JOINED,
    "p2p_tx.deposit_paid": _F.DEPOSIT_PAID,
    "p2p_tx.deposit_review_flagged": _F.DEPOSIT_PAID,
    "p2p_tx.deposit_review_finished": _F.DEPOSIT_PAID,
    "p2p_tx.deposit_refunded": _F.DEPOSIT_REFUNDED,
    "p2p_tx.deposit_accepted": _F.DEPOSIT_ACCEPTED,
    "p2p_tx.priced": _F.DEPOSIT_ACCEPTED,
    "p2p_tx.remainder_skipped": _F.REMAINDER_SKIPPED,
    "p2p_tx.remainder_paid": _F.REMAINDER_SKIPPED,
    "p2p_tx.remainder_review_flagged": _F.REMAINDER_SKIPPED,
    "p2p_tx.remainder_review_finished": _F.REMAINDER_SKIPPED,
    "p2p_tx.buyer_handover_confirmed": _F.BUYER_HANDOVER_CONFIRMED,
    "p2p_tx.seller_handover_confirmed": _F.SELLER_HANDOVER_CONFIRMED,
    "p2p_tx.complained": _F.COMPLAINED,
    "p2p_tx.funds_released": _F.FUNDS_RELEASED,
    "p2p_tx.funds_refunded": _F.DEPOSIT_REFUNDED,
})

ONLINE_WEBHOOK_EVENT_CODES = frozenset(ONLINE_WEBHOOK_STATES)
F2F_WEBHOOK_EVENT_CODES = frozenset(F2F_WEBHOOK_STATES)


def map_webhook_to_online_state(code: str) -> Optional[OnlineTransactionState]:
    """Return the online state after webhook *code*, or ``None`` if unknown."""
    return ONLINE_WEBHOOK_STATES.get(code)


def map_webhook_to_f2f_state(code: str) -> Optional[F2FTransactionState]:
    """Return the face-to-face state after webhook *code*, or ``None`` if unknown."""
    return F2F_WEBHOOK_STATES.get(code)


map_webhook_to_trustap_state = map_webhook_to_online_state
"""Older name of :func:`map_webhook_to_online_state`."""


def _coerce(state_type: type[_State], value: Union[_State, str]) -> Optional[_State]:
    try:
        return state_type(value)
    except ValueError:
        return None


def is_valid_online_transition(
    from_state: Union[OnlineTransactionState, str],
    to_state: Union[OnlineTransactionState, str],
) -> bool:
    """Return ``True`` if *to_state* directly follows *from_state* online.

    Plain state strings are accepted; unknown states are never valid.
    """
    source = _coerce(OnlineTransactionState, from_state)
    target = _coerce(OnlineTransactionState, to_state)
    if source is None or target is None:
        return False
    return target in ONLINE_STATE_TRANSITIONS[source]


def is_valid_f2f_transition(
    from_state: Union[F2FTransactionState, str],
    to_state: Union[F2FTransactionState, str],
) -> bool:
    """Return ``True`` if *to_state* directly follows *from_state* face to face."""
    source = _coerce(F2FTransactionState, from_state)
    target = _coerce(F2FTransactionState, to_state)
    if source is None or target is None:
        return False
    return target in F2F_STATE_TRANSITIONS[source]
