"""Pydantic schemas for the catalog and order orchestrator payloads.

These are external contracts (anti-corruption layer) — separate from the
Protean cart aggregate. Records are parsed leniently: unknown fields are
ignored and numeric strings are coerced.
"""

import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Compact separators reproduce the orchestrator's expected variable text exactly.
_COMPACT_JSON = (",", ":")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class Product(BaseModel):
    id: int | str
    name: str = ""
    description: str = ""
    price: float = Field(ge=0)
    stock: int | None = None
    image: str | None = None

    @property
    def in_stock(self) -> bool:
        return self.stock != 0


class ProductListing(BaseModel):
    """Envelope returned by the product listing; a missing `data` means no products."""

    data: list[Product] | None = None

    @property
    def products(self) -> list[Product]:
        return self.data or []


# ---------------------------------------------------------------------------
# Order history
# ---------------------------------------------------------------------------
class OrderLine(BaseModel):
    product_name: str
    unit_price: float
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity


class OrderRecord(BaseModel):
    id: int | str
    status: str
    created_at: datetime
    items: list[OrderLine] = Field(default_factory=list)
    total_amount: float | None = None
    currency: str | None = None


# ---------------------------------------------------------------------------
# Order creation
# ---------------------------------------------------------------------------
class Customer(BaseModel):
    name: str
    email: str
    address: str | None = None
    phone: str | None = None


DEFAULT_CUSTOMER = Customer(
    name="Alice Smith",
    email="alice@example.com",
    address="123 Main Street",
    phone="+111111111",
)


class OrderItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int | str = Field(alias="productId")
    quantity: int = Field(ge=1)


class OrderRequest(BaseModel):
    items: list[OrderItemRequest]
    customer: Customer

    @classmethod
    def from_cart(cls, cart, customer: Customer) -> "OrderRequest":
        return cls(
            items=[OrderItemRequest(product_id=item.catalog_id, quantity=item.quantity) for item in cart.items],
            customer=customer,
        )

    def to_process_variables(self) -> dict:
        """Build the process-start body.

        The orchestrator takes each variable as `{"value": <text>}`, so the
        items array and the customer object travel as JSON text inside JSON.
        """
        items = [item.model_dump(by_alias=True) for item in self.items]
        customer = self.customer.model_dump()
        return {
            "variables": {
                "items": {"value": json.dumps(items, separators=_COMPACT_JSON)},
                "customer": {"value": json.dumps(customer, separators=_COMPACT_JSON)},
            }
        }


class ProcessStartResponse(BaseModel):
    """Process-start reply. `id` is the order reference and may be missing."""

    id: int | str | None = None
