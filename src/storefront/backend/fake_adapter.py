"""Configurable fake storefront backend for development and testing.

Serves products and orders from memory and can be switched at runtime to
fail like an unreachable or rejecting collaborator. Every call is recorded
in `calls` so tests can assert on what the client sent.
"""

from uuid import uuid4

from storefront.backend.port import (
    ApplicationFailure,
    NetworkFailure,
    OrderPlacement,
    StorefrontBackend,
)
from storefront.backend.schemas import OrderRecord, OrderRequest, Product

FAILURE_NETWORK = "network"
FAILURE_APPLICATION = "application"


class FakeBackend(StorefrontBackend):
    """In-memory backend."""

    def __init__(self, products=None, orders=None) -> None:
        self.products: list[Product] = list(products or [])
        self.orders: list[OrderRecord] = list(orders or [])
        self.failure: str | None = None
        self.failure_reason: str = "Failed to start process"
        self.return_reference: bool = True
        self.on_create_order = None
        self.calls: list[dict] = []

    def configure(
        self,
        failure: str | None = None,
        failure_reason: str = "Failed to start process",
        return_reference: bool = True,
    ) -> None:
        """Configure behavior at runtime.

        `failure` is None (succeed), FAILURE_NETWORK or FAILURE_APPLICATION.
        """
        self.failure = failure
        self.failure_reason = failure_reason
        self.return_reference = return_reference

    def _fail_if_configured(self) -> None:
        if self.failure == FAILURE_NETWORK:
            raise NetworkFailure(f"Network error: {self.failure_reason}")
        if self.failure == FAILURE_APPLICATION:
            raise ApplicationFailure(self.failure_reason, 500)

    def list_products(self) -> list[Product]:
        self.calls.append({"method": "list_products"})
        self._fail_if_configured()
        return list(self.products)

    def create_order(self, request: OrderRequest) -> OrderPlacement:
        self.calls.append({"method": "create_order", "request": request})
        if self.on_create_order is not None:
            # Lets tests act while the call is outstanding
            self.on_create_order(request)
        self._fail_if_configured()

        if not self.return_reference:
            return OrderPlacement()
        return OrderPlacement(order_reference=f"fake_proc_{uuid4().hex[:12]}")

    def list_orders(self) -> list[OrderRecord]:
        self.calls.append({"method": "list_orders"})
        self._fail_if_configured()
        return list(self.orders)
