"""Storefront session — the composition root.

A session owns exactly one cart, one location history, one router and one
backend. Pages receive the cart they need from here; nothing reaches for a
global cart. While the session runs it listens to the history and swaps the
active page whenever navigation lands on a different route.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from uuid import uuid4

import structlog

from storefront.backend import get_backend, use_backend
from storefront.backend.port import StorefrontBackend
from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.routing.history import History
from storefront.routing.router import RouteMatch, Router
from storefront.utils.logging import add_context, clear_context, configure_logging
from storefront.views.base import Page
from storefront.views.cart import CartPage
from storefront.views.checkout import CheckoutPage
from storefront.views.home import HomePage
from storefront.views.navigation import NavigationBar
from storefront.views.orders import OrdersPage

logger = structlog.get_logger(__name__)

ROUTES = [
    ("/", HomePage.view_id),
    ("/cart", CartPage.view_id),
    ("/checkout", CheckoutPage.view_id),
    ("/orders", OrdersPage.view_id),
]


class StorefrontApp:
    def __init__(self, backend: StorefrontBackend | None = None, history: History | None = None) -> None:
        self.backend = backend if backend is not None else get_backend()
        self.cart = Cart.create()
        self.history = history if history is not None else History()
        self.router = Router(self.history)
        for pattern, view_id in ROUTES:
            self.router.register_route(pattern, view_id)
        self.navigation = NavigationBar(self.cart)

        self.active_match: RouteMatch | None = None
        self.active_page: Page | None = None

    def _build_page(self, match: RouteMatch) -> Page:
        factories = {
            HomePage.view_id: lambda: HomePage(self.cart, self.backend),
            CartPage.view_id: lambda: CartPage(self.cart),
            CheckoutPage.view_id: lambda: CheckoutPage(self.cart, self.backend),
            OrdersPage.view_id: lambda: OrdersPage(self.backend),
        }
        return factories[match.view_id]()

    def render(self, location: str | None = None) -> Page | None:
        """Make the page for `location` (default: current location) active.

        Staying on the same route keeps the page; moving elsewhere closes it.
        """
        match = self.router.resolve(self.history.location if location is None else location)

        if match == self.active_match and self.active_page is not None:
            return self.active_page

        self._close_active_page()
        self.active_match = match
        if match is None:
            return None

        logger.debug("Opening page", view_id=match.view_id, params=match.params)
        self.active_page = self._build_page(match)
        self.active_page.open()
        return self.active_page

    def _close_active_page(self) -> None:
        if self.active_page is not None:
            self.active_page.close()
        self.active_page = None

    def navigate(self, location: str) -> None:
        self.history.navigate(location)

    @contextmanager
    def running(self) -> Iterator["StorefrontApp"]:
        """Follow navigation until the block exits, then close the active page."""
        with self.router.on_location_change(self.render):
            self.render()
            try:
                yield self
            finally:
                self._close_active_page()
                self.active_match = None


@contextmanager
def open_session(
    backend: StorefrontBackend | None = None,
    location: str = "/",
    log_dir: str | None = None,
) -> Iterator[StorefrontApp]:
    """Configure logging, initialize the domain and run one storefront session.

    A `backend` given here is also what get_backend() returns until the
    session ends.
    """
    configure_logging(log_dir=log_dir)
    storefront.init()

    add_context(session_id=uuid4().hex[:12])
    try:
        with storefront.domain_context(), use_backend(backend if backend is not None else get_backend()) as active:
            app = StorefrontApp(backend=active, history=History(location))
            with app.running():
                yield app
    finally:
        clear_context()
