"""Cart page — line editing and the order summary."""

from storefront.views.base import Page, format_amount


class CartPage(Page):
    view_id = "cart"

    def __init__(self, cart) -> None:
        self.cart = cart

    @property
    def is_empty(self) -> bool:
        return self.cart.is_empty

    @property
    def lines(self) -> list:
        return list(self.cart.items)

    def increment(self, product_id) -> None:
        item = self.cart.find_item(product_id)
        if item is not None:
            self.cart.set_quantity(product_id, item.quantity + 1)

    def decrement(self, product_id) -> None:
        """Going below one removes the line."""
        item = self.cart.find_item(product_id)
        if item is not None:
            self.cart.set_quantity(product_id, item.quantity - 1)

    def remove(self, product_id) -> None:
        self.cart.remove_item(product_id)

    def clear(self) -> None:
        self.cart.clear()

    def summary(self) -> dict:
        total = format_amount(self.cart.total)
        return {"subtotal": total, "shipping": "Free", "total": total}
