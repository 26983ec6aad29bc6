"""Tests for the cart page actions."""

from storefront.backend.schemas import Product
from storefront.views.cart import CartPage
from storefront.views.navigation import NavigationBar


def _filled(cart):
    cart.add_item(Product(id=1, name="Road Bike", price=5), 2)
    cart.add_item(Product(id=2, name="Helmet", price=3), 1)
    return cart


def test_empty_cart_page(cart):
    page = CartPage(cart)
    assert page.is_empty
    assert page.lines == []


def test_increment_and_decrement(cart):
    page = CartPage(_filled(cart))
    page.increment(2)
    assert cart.find_item(2).quantity == 2
    page.decrement(1)
    assert cart.find_item(1).quantity == 1


def test_decrement_below_one_removes_line(cart):
    page = CartPage(_filled(cart))
    page.decrement(2)
    assert cart.find_item(2) is None
    assert [line.name for line in page.lines] == ["Road Bike"]


def test_remove_and_clear(cart):
    page = CartPage(_filled(cart))
    page.remove(1)
    assert cart.count == 1
    page.clear()
    assert page.is_empty


def test_summary(cart):
    page = CartPage(_filled(cart))
    assert page.summary() == {"subtotal": "13.00", "shipping": "Free", "total": "13.00"}


def test_navigation_badge_tracks_cart(cart):
    nav = NavigationBar(cart)
    assert nav.cart_badge is None
    _filled(cart)
    assert nav.cart_badge == 3
    cart.clear()
    assert nav.cart_badge is None


def test_navigation_links():
    assert NavigationBar(None).links() == [("Products", "#/"), ("Orders", "#/orders"), ("Cart", "#/cart")]
