"""Checkout page — order summary and the place-order action."""

from storefront.backend.port import StorefrontBackend
from storefront.backend.schemas import DEFAULT_CUSTOMER, Customer
from storefront.checkout.flow import CheckoutFlow, OrderSubmission
from storefront.views.base import Page, format_amount


class CheckoutPage(Page):
    view_id = "checkout"

    def __init__(self, cart, backend: StorefrontBackend, customer: Customer = DEFAULT_CUSTOMER) -> None:
        self.cart = cart
        self.customer = customer
        self.flow = CheckoutFlow(backend, customer=customer)

    @property
    def is_inert(self) -> bool:
        """Nothing to check out: empty cart and no order placed from this page."""
        return self.cart.is_empty and not self.flow.succeeded

    @property
    def can_submit(self) -> bool:
        return not self.is_inert and not self.flow.is_submitting and not self.flow.succeeded

    @property
    def submission(self) -> OrderSubmission:
        return self.flow.submission

    def submit(self) -> OrderSubmission:
        if self.is_inert:
            return self.flow.submission
        return self.flow.submit(self.cart, self.customer)

    def close(self) -> None:
        self.flow.dispose()

    def button_label(self) -> str:
        return "Processing..." if self.flow.is_submitting else "Place Order"

    def confirmation_message(self) -> str | None:
        if not self.flow.succeeded:
            return None
        return f"We've sent a confirmation email to {self.customer.email}"

    def summary_lines(self) -> list[tuple[str, str]]:
        return [(f"{item.name} x {item.quantity}", format_amount(item.subtotal)) for item in self.cart.items]

    def total(self) -> str:
        return format_amount(self.cart.total)
