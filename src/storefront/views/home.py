"""Product list page."""

import time

import structlog

from storefront.backend.port import BackendError, StorefrontBackend
from storefront.backend.schemas import Product
from storefront.views.base import Page

logger = structlog.get_logger(__name__)

# How long a product keeps its "added" confirmation after a click
ADDED_CONFIRMATION_SECONDS = 2.0


class HomePage(Page):
    view_id = "home"

    def __init__(self, cart, backend: StorefrontBackend, clock=time.monotonic) -> None:
        self.cart = cart
        self.backend = backend
        self.clock = clock
        self.products: list[Product] = []
        self.loading = True
        self.error: str | None = None
        self.last_added = None
        self.last_added_at: float | None = None

    def open(self) -> None:
        self.load()

    def load(self) -> None:
        self.loading = True
        self.error = None
        self._forget_last_added()
        try:
            self.products = self.backend.list_products()
        except BackendError as exc:
            logger.warning("Could not load products", error=str(exc))
            self.error = str(exc)
        finally:
            self.loading = False

    def find_product(self, product_id) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def add_to_cart(self, product_id) -> bool:
        """Put one unit in the cart. Out-of-stock and unknown products are refused."""
        product = self.find_product(product_id)
        if product is None or not product.in_stock:
            return False

        self.cart.add_item(product)
        self.last_added = product.id
        self.last_added_at = self.clock()
        return True

    def _forget_last_added(self) -> None:
        self.last_added = None
        self.last_added_at = None

    def recently_added(self, product: Product) -> bool:
        """True while `product` is the latest add and its confirmation has not expired."""
        if self.last_added is None or self.last_added != product.id:
            return False
        if self.clock() - self.last_added_at >= ADDED_CONFIRMATION_SECONDS:
            self._forget_last_added()
            return False
        return True

    def button_label(self, product: Product) -> str:
        if self.recently_added(product):
            return "✓ Added!"
        if not product.in_stock:
            return "Out of Stock"
        return "Add to Cart"
