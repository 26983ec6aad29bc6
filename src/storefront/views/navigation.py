"""Top navigation bar."""

from storefront.routing.history import href

NAV_LINKS = [
    ("Products", "/"),
    ("Orders", "/orders"),
    ("Cart", "/cart"),
]


class NavigationBar:
    def __init__(self, cart) -> None:
        self.cart = cart

    @property
    def cart_badge(self) -> int | None:
        """Item count shown on the cart link, hidden when the cart is empty."""
        count = self.cart.count
        return count if count > 0 else None

    def links(self) -> list[tuple[str, str]]:
        return [(label, href(path)) for label, path in NAV_LINKS]
