"""Webhook support: event validation, handler dispatch and lifecycle states."""

from trustap.webhooks.handlers import (
    WebhookHandlers,
    create_webhook_handlers,
    dispatch_webhook_event,
)
from trustap.webhooks.schemas import EVENT_MODELS, WebhookEvent, WebhookEventBase, parse_webhook_event
from trustap.webhooks.state import (
    F2F_STATE_TRANSITIONS,
    ONLINE_STATE_TRANSITIONS,
    F2FTransactionState,
    OnlineTransactionState,
    is_valid_f2f_transition,
    is_valid_online_transition,
    map_webhook_to_f2f_state,
    map_webhook_to_online_state,
    map_webhook_to_trustap_state,
)

__all__ = [
    "EVENT_MODELS",
    "F2F_STATE_TRANSITIONS",
    "F2FTransactionState",
    "ONLINE_STATE_TRANSITIONS",
    "OnlineTransactionState",
    "WebhookEvent",
    "WebhookEventBase",
    "WebhookHandlers",
    "create_webhook_handlers",
    "dispatch_webhook_event",
    "is_valid_f2f_transition",
    "is_valid_online_transition",
    "map_webhook_to_f2f_state",
    "map_webhook_to_online_state",
    "map_webhook_to_trustap_state",
    "parse_webhook_event",
]
