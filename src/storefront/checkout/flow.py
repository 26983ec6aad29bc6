"""Checkout flow — hands the cart to the order orchestrator and tracks the outcome.

One flow instance lives as long as the checkout page that created it.

State Machine:
    IDLE → SUBMITTING → SUCCEEDED (terminal)
                      → FAILED → SUBMITTING (manual retry)

While SUBMITTING, further submits are ignored. The cart is cleared only when
the order was placed; a failure leaves it exactly as it was. A success reply
without an order reference still counts as success.
"""

from dataclasses import dataclass
from enum import Enum

import structlog
from protean.exceptions import ValidationError

from storefront.backend.port import BackendError, StorefrontBackend
from storefront.backend.schemas import DEFAULT_CUSTOMER, Customer, OrderRequest

logger = structlog.get_logger(__name__)


class SubmissionStatus(Enum):
    IDLE = "Idle"
    SUBMITTING = "Submitting"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    SubmissionStatus.IDLE: {SubmissionStatus.SUBMITTING},
    SubmissionStatus.SUBMITTING: {SubmissionStatus.SUCCEEDED, SubmissionStatus.FAILED},
    SubmissionStatus.FAILED: {SubmissionStatus.SUBMITTING},
    SubmissionStatus.SUCCEEDED: set(),  # Terminal
}


@dataclass(frozen=True)
class OrderSubmission:
    """Snapshot of the flow: status plus the reference or error that goes with it."""

    status: SubmissionStatus
    order_reference: str | None = None
    error_message: str | None = None


class CheckoutFlow:
    def __init__(self, backend: StorefrontBackend, customer: Customer = DEFAULT_CUSTOMER) -> None:
        self.backend = backend
        self.customer = customer
        self.status = SubmissionStatus.IDLE
        self.order_reference: str | None = None
        self.error_message: str | None = None
        self.attempts = 0
        self.disposed = False

    @property
    def submission(self) -> OrderSubmission:
        return OrderSubmission(
            status=self.status,
            order_reference=self.order_reference,
            error_message=self.error_message,
        )

    @property
    def is_submitting(self) -> bool:
        return self.status == SubmissionStatus.SUBMITTING

    @property
    def succeeded(self) -> bool:
        return self.status == SubmissionStatus.SUCCEEDED

    @property
    def failed(self) -> bool:
        return self.status == SubmissionStatus.FAILED

    def _transition(self, new_status: SubmissionStatus) -> None:
        if new_status not in _VALID_TRANSITIONS[self.status]:
            raise ValidationError(
                {"status": [f"Cannot move checkout from {self.status.value} to {new_status.value}"]}
            )
        self.status = new_status

    def dispose(self) -> None:
        """The owning page is gone; a late outcome is no longer applied here."""
        self.disposed = True

    def submit(self, cart, customer: Customer | None = None) -> OrderSubmission:
        """Place an order for the cart's current contents.

        Ignored while a submission is outstanding or after success.

        Raises:
            ValidationError: The cart is empty.
        """
        if self.status == SubmissionStatus.SUBMITTING:
            logger.info("Checkout already submitting, ignoring submit")
            return self.submission
        if self.status == SubmissionStatus.SUCCEEDED:
            logger.info("Order already placed, ignoring submit", order_reference=self.order_reference)
            return self.submission
        if cart.is_empty:
            raise ValidationError({"cart": ["Cannot submit an empty cart"]})

        self._transition(SubmissionStatus.SUBMITTING)
        self.error_message = None
        self.attempts += 1

        request = OrderRequest.from_cart(cart, customer or self.customer)
        logger.info("Submitting order", item_count=len(request.items), attempt=self.attempts)

        try:
            placement = self.backend.create_order(request)
        except BackendError as exc:
            if self.disposed:
                logger.info("Discarding order failure for a closed checkout", error=str(exc))
                return self.submission
            logger.warning("Order submission failed", error=str(exc), attempt=self.attempts)
            self.error_message = str(exc)
            self._transition(SubmissionStatus.FAILED)
            return self.submission

        # The order exists whether or not anyone is still watching this flow
        cart.clear()

        if self.disposed:
            logger.info("Discarding order outcome for a closed checkout", order_reference=placement.order_reference)
            return self.submission

        if placement.order_reference is None:
            logger.warning("Order placed without an order reference")
        self.order_reference = placement.order_reference
        self._transition(SubmissionStatus.SUCCEEDED)
        logger.info("Order placed", order_reference=self.order_reference)
        return self.submission
