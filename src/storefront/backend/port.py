"""Storefront backend port (abstract interface).

Defines the contract every backend adapter implements: the catalog listing,
order creation through the order orchestrator, and order history. This lets
the views run against HttpBackend (real collaborators) or FakeBackend
(development and tests) without changing any domain or view code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.backend.schemas import OrderRecord, OrderRequest, Product


class BackendError(Exception):
    """A collaborator call did not produce a usable result."""


class NetworkFailure(BackendError):
    """The collaborator could not be reached."""


class ApplicationFailure(BackendError):
    """The collaborator answered, but with a non-success indication."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class OrderPlacement:
    """Outcome of a successful order creation.

    `order_reference` can be None: a success status without an identifier
    still counts as a placed order.
    """

    order_reference: str | None = None


class StorefrontBackend(ABC):
    """Abstract storefront backend interface."""

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return the purchasable products in catalog order."""
        ...

    @abstractmethod
    def create_order(self, request: OrderRequest) -> OrderPlacement:
        """Start the order fulfillment process for `request`.

        Raises:
            NetworkFailure: The orchestrator could not be reached.
            ApplicationFailure: The orchestrator rejected the order.
        """
        ...

    @abstractmethod
    def list_orders(self) -> list[OrderRecord]:
        """Return the order history as delivered by the order service."""
        ...
