"""Pydantic models for Trustap online-transaction (``basic_tx.*``) webhooks.

Every webhook body shares one envelope::

    {
        "code": "basic_tx.paid",
        "user_id": "1-abc",            # null for system events
        "target_id": "12345",
        "target_preview": {...},       # transaction snapshot, shape per code
        "time": "2024-01-01T12:00:00Z",
        "metadata": {...}
    }

Each event code has its own model; :data:`WebhookEvent` is the discriminated
union over ``code``. There is no fallback model: a payload with an unknown
code, or one whose ``target_preview`` does not match its code, fails
validation.

Scalar fields use pydantic's strict types, so ``"1234"`` is not accepted
where a number is expected. Unknown keys in ``target_preview`` are ignored;
unknown keys in ``metadata`` are kept.

Example::

    event = parse_webhook_event(request_body)
    if isinstance(event, BasicTxPaidEvent):
        print(event.target_preview.paid)
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from trustap.exceptions import WebhookValidationError

Number = Union[StrictInt, StrictFloat]


# --- Shared sub-models ---


class Tracking(BaseModel):
    """Shipping details submitted by the seller."""

    carrier: StrictStr
    tracking_code: StrictStr


class Complaint(BaseModel):
    """A buyer complaint."""

    description: StrictStr


# --- Target previews ---


class TargetPreview(BaseModel):
    """Fields present in every transaction snapshot."""

    id: StrictInt
    status: StrictStr
    currency: StrictStr
    quantity: Number
    price: Number
    charge: Number
    charge_seller: Number
    description: StrictStr
    created: StrictStr
    is_payment_in_progress: StrictBool
    client_id: StrictStr
    buyer_id: StrictStr
    seller_id: StrictStr


class JoinedTargetPreview(TargetPreview):
    joined: StrictStr


class CancelledTargetPreview(JoinedTargetPreview):
    cancelled: StrictStr


class RejectedTargetPreview(TargetPreview):
    rejected: Optional[StrictStr] = None
    rejection_reason: Optional[StrictStr] = None


class ClaimedTargetPreview(TargetPreview):
    claimed: Optional[StrictStr] = None


class PaidTargetPreview(JoinedTargetPreview):
    paid: StrictStr
    tracking_details_window_started: StrictStr
    tracking_details_deadline: StrictStr
    charge_international_payment: Optional[Number] = None


class TrackedTargetPreview(PaidTargetPreview):
    tracked: StrictStr
    tracking: Tracking


class DeliveredTargetPreview(TrackedTargetPreview):
    delivered: StrictStr
    complaint_period_deadline: StrictStr


class ComplainedTargetPreview(DeliveredTargetPreview):
    complained: StrictStr
    complaint: Complaint


class ComplaintPeriodEndedTargetPreview(DeliveredTargetPreview):
    complaint_period_ended: StrictStr


class FundsReleasedTargetPreview(ComplaintPeriodEndedTargetPreview):
    funds_released: StrictStr
    released_to_seller: StrictBool
    amount_released: Number


class PaymentRefundedTargetPreview(JoinedTargetPreview):
    paid: Optional[StrictStr] = None
    refunded: Optional[StrictStr] = None
    refund_amount: Optional[Number] = None
    charge_international_payment: Optional[Number] = None


# --- Metadata ---


class EventMetadata(BaseModel):
    """Event metadata; keys beyond the declared ones are preserved."""

    model_config = ConfigDict(extra="allow")


class PaymentFailedMetadata(EventMetadata):
    failure_code: StrictStr


# --- Event envelopes ---


class WebhookEventBase(BaseModel):
    """Envelope fields shared by every webhook event."""

    user_id: Optional[StrictStr]
    target_id: StrictStr
    time: StrictStr
    metadata: EventMetadata


class BasicTxJoinedEvent(WebhookEventBase):
    code: Literal["basic_tx.joined"]
    target_preview: JoinedTargetPreview


class BasicTxRejectedEvent(WebhookEventBase):
    code: Literal["basic_tx.rejected"]
    target_preview: RejectedTargetPreview


class BasicTxCancelledEvent(WebhookEventBase):
    code: Literal["basic_tx.cancelled"]
    target_preview: CancelledTargetPreview


class BasicTxClaimedEvent(WebhookEventBase):
    code: Literal["basic_tx.claimed"]
    target_preview: ClaimedTargetPreview


class BasicTxListingTransactionAcceptedEvent(WebhookEventBase):
    code: Literal["basic_tx.listing_transaction_accepted"]
    target_preview: JoinedTargetPreview


class BasicTxListingTransactionRejectedEvent(WebhookEventBase):
    code: Literal["basic_tx.listing_transaction_rejected"]
    target_preview: RejectedTargetPreview


class BasicTxPaymentFailedEvent(WebhookEventBase):
    code: Literal["basic_tx.payment_failed"]
    target_preview: JoinedTargetPreview
    metadata: PaymentFailedMetadata


class BasicTxPaidEvent(WebhookEventBase):
    code: Literal["basic_tx.paid"]
    target_preview: PaidTargetPreview


class BasicTxPaymentRefundedEvent(WebhookEventBase):
    code: Literal["basic_tx.payment_refunded"]
    target_preview: PaymentRefundedTargetPreview


class BasicTxPaymentReviewFlaggedEvent(WebhookEventBase):
    code: Literal["basic_tx.payment_review_flagged"]
    target_preview: PaidTargetPreview


class BasicTxPaymentReviewFinishedEvent(WebhookEventBase):
    code: Literal["basic_tx.payment_review_finished"]
    target_preview: PaidTargetPreview


class BasicTxTrackingDetailsSubmissionDeadlineExtendedEvent(WebhookEventBase):
    code: Literal["basic_tx.tracking_details_submission_deadline_extended"]
    target_preview: PaidTargetPreview


class BasicTxTrackedEvent(WebhookEventBase):
    code: Literal["basic_tx.tracked"]
    target_preview: TrackedTargetPreview


class BasicTxDeliveredEvent(WebhookEventBase):
    code: Literal["basic_tx.delivered"]
    target_preview: DeliveredTargetPreview


class BasicTxComplainedEvent(WebhookEventBase):
    code: Literal["basic_tx.complained"]
    target_preview: ComplainedTargetPreview


class BasicTxComplaintPeriodEndedEvent(WebhookEventBase):
    code: Literal["basic_tx.complaint_period_ended"]
    target_preview: ComplaintPeriodEndedTargetPreview


class BasicTxFundsReleasedEvent(WebhookEventBase):
    code: Literal["basic_tx.funds_released"]
    target_preview: FundsReleasedTargetPreview


class BasicTxFundsRefundedEvent(WebhookEventBase):
    code: Literal["basic_tx.funds_refunded"]
    target_preview: PaymentRefundedTargetPreview


EVENT_MODELS: dict[str, type[WebhookEventBase]] = {
    "basic_tx.joined": BasicTxJoinedEvent,
    "basic_tx.rejected": BasicTxRejectedEvent,
    "basic_tx.cancelled": BasicTxCancelledEvent,
    "basic_tx.claimed": BasicTxClaimedEvent,
    "basic_tx.listing_transaction_accepted": BasicTxListingTransactionAcceptedEvent,
    "basic_tx.listing_transaction_rejected": BasicTxListingTransactionRejectedEvent,
    "basic_tx.payment_failed": BasicTxPaymentFailedEvent,
    "basic_tx.paid": BasicTxPaidEvent,
    "basic_tx.payment_refunded": BasicTxPaymentRefundedEvent,
    "basic_tx.payment_review_flagged": BasicTxPaymentReviewFlaggedEvent,
    "basic_tx.payment_review_finished": BasicTxPaymentReviewFinishedEvent,
    "basic_tx.tracking_details_submission_deadline_extended": (
        BasicTxTrackingDetailsSubmissionDeadlineExtendedEvent
    ),
    "basic_tx.tracked": BasicTxTrackedEvent,
    "basic_tx.delivered": BasicTxDeliveredEvent,
    "basic_tx.complained": BasicTxComplainedEvent,
    "basic_tx.complaint_period_ended": BasicTxComplaintPeriodEndedEvent,
    "basic_tx.funds_released": BasicTxFundsReleasedEvent,
    "basic_tx.funds_refunded": BasicTxFundsRefundedEvent,
}
"""Event code -> model, one entry per online webhook code."""

WebhookEvent = Annotated[
    Union[
        BasicTxJoinedEvent,
        BasicTxRejectedEvent,
        BasicTxCancelledEvent,
        BasicTxClaimedEvent,
        BasicTxListingTransactionAcceptedEvent,
        BasicTxListingTransactionRejectedEvent,
        BasicTxPaymentFailedEvent,
        BasicTxPaidEvent,
        BasicTxPaymentRefundedEvent,
        BasicTxPaymentReviewFlaggedEvent,
        BasicTxPaymentReviewFinishedEvent,
        BasicTxTrackingDetailsSubmissionDeadlineExtendedEvent,
        BasicTxTrackedEvent,
        BasicTxDeliveredEvent,
        BasicTxComplainedEvent,
        BasicTxComplaintPeriodEndedEvent,
        BasicTxFundsReleasedEvent,
        BasicTxFundsRefundedEvent,
    ],
    Field(discriminator="code"),
]

_webhook_event_adapter: TypeAdapter[Any] = TypeAdapter(WebhookEvent)


def parse_webhook_event(payload: Union[str, bytes, dict[str, Any]]) -> WebhookEventBase:
    """Validate a webhook body and return the model for its event code.

    Args:
        payload: The decoded JSON object, or the raw request body.

    Returns:
        An instance of the event model selected by ``payload["code"]``.

    Raises:
        WebhookValidationError: If the code is unknown or the body does not
            match the model for its code. The pydantic error is chained.
    """
    try:
        if isinstance(payload, (str, bytes)):
            return _webhook_event_adapter.validate_json(payload)
        return _webhook_event_adapter.validate_python(payload)
    except ValidationError as exc:
        raise WebhookValidationError(f"Invalid webhook payload: {exc}") from exc
