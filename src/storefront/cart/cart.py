"""Cart aggregate (CQRS) — the shopping selection for one storefront session.

The cart lives only as long as the session that owns it; nothing is persisted.
Each product appears at most once, and a line's quantity never drops below
one: setting it to zero or less removes the line instead. Totals are derived
from the current lines on every read.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


def _is_numeric_id(product_id) -> bool:
    return isinstance(product_id, int) and not isinstance(product_id, bool)


@storefront.entity(part_of="Cart")
class LineItem:
    # Catalog ids are either integers or strings, and `1` is not `"1"`.
    # The text form is stored alongside a flag recording which it was.
    product_id = String(required=True, max_length=255)
    numeric_id = Boolean(default=False)
    name = String(max_length=255, default="")
    price = Float(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=2048)

    @property
    def catalog_id(self) -> int | str:
        """The product id exactly as the catalog gave it."""
        return int(self.product_id) if self.numeric_id else self.product_id

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


@storefront.aggregate
class Cart:
    items = HasMany(LineItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [(item.product_id, item.numeric_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        numeric = _is_numeric_id(product_id)
        return next(
            (i for i in self.items if i.numeric_id == numeric and i.product_id == str(product_id)),
            None,
        )

    @property
    def total(self) -> float:
        return sum(item.price * item.quantity for item in self.items)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1):
        """Add a product, or grow the quantity of its existing line.

        `product` is anything carrying `id`, `name` and `price` (a catalog
        `Product` in practice); `image` is picked up when present.
        """
        existing = self.find_item(product.id)

        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_items(
                LineItem(
                    product_id=str(product.id),
                    numeric_id=_is_numeric_id(product.id),
                    name=getattr(product, "name", None) or "",
                    price=product.price,
                    quantity=quantity,
                    image=getattr(product, "image", None),
                )
            )
            new_quantity = quantity

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=quantity,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id):
        """Remove the line for `product_id`; absent products are ignored."""
        item = self.find_item(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def set_quantity(self, product_id, quantity):
        """Set a line's quantity in place; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id)
            return

        item = self.find_item(product_id)
        if item is None:
            return

        previous_quantity = item.quantity
        if previous_quantity == quantity:
            return

        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def clear(self):
        """Drop every line."""
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)

        if removed:
            self.raise_(
                CartCleared(
                    cart_id=str(self.id),
                    items_removed_count=len(removed),
                )
            )
