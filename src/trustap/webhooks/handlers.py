"""Exhaustive webhook handler registry.

:class:`WebhookHandlers` is built from a mapping of event code -> handler and
refuses to construct unless every known ``basic_tx.*`` code has a handler,
so adding an event model without handling it fails at startup rather than
when the first such webhook arrives.

Handlers may be plain functions or coroutines; each receives the validated
event model.

Example::

    handlers = WebhookHandlers({
        "basic_tx.paid": on_paid,
        "basic_tx.delivered": on_delivered,
        ...  # every other code
    })
    await dispatch_webhook_event(handlers, request_body)
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator, Mapping
from typing import Any, Callable, Union

from trustap.exceptions import ConfigError
from trustap.webhooks.schemas import EVENT_MODELS, WebhookEventBase, parse_webhook_event

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[Any], Any]


class WebhookHandlers:
    """One handler per webhook event code.

    Args:
        handlers: Event code -> callable. Must cover exactly the codes in
            :data:`~trustap.webhooks.schemas.EVENT_MODELS`.

    Raises:
        ConfigError: If a code is missing or an unknown code is given.
    """

    def __init__(self, handlers: Mapping[str, WebhookHandler]) -> None:
        missing = sorted(set(EVENT_MODELS) - set(handlers))
        if missing:
            raise ConfigError(f"Missing webhook handlers for: {', '.join(missing)}")

        unknown = sorted(set(handlers) - set(EVENT_MODELS))
        if unknown:
            raise ConfigError(f"Unknown webhook event codes: {', '.join(unknown)}")

        self._handlers = dict(handlers)

    def __getitem__(self, code: str) -> WebhookHandler:
        return self._handlers[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    async def dispatch(self, event: WebhookEventBase) -> Any:
        """Call the handler registered for ``event.code`` and return its result."""
        handler = self._handlers[event.code]
        logger.debug("Dispatching webhook %s for target %s", event.code, event.target_id)
        result = handler(event)
        if inspect.isawaitable(result):
            result = await result
        return result


def create_webhook_handlers(handlers: Mapping[str, WebhookHandler]) -> WebhookHandlers:
    """Build a :class:`WebhookHandlers` registry; see its constructor."""
    return WebhookHandlers(handlers)


async def dispatch_webhook_event(
    handlers: WebhookHandlers,
    payload: Union[WebhookEventBase, str, bytes, dict[str, Any]],
) -> Any:
    """Validate *payload* if needed and route it to its handler.

    Raises:
        WebhookValidationError: If *payload* is raw data that fails validation.
    """
    event = payload if isinstance(payload, WebhookEventBase) else parse_webhook_event(payload)
    return await handlers.dispatch(event)
