"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from pytest_bdd import given, parsers, then, when
from storefront.backend.fake_adapter import FakeBackend
from storefront.backend.schemas import Product
from storefront.cart.cart import Cart
from storefront.checkout.flow import CheckoutFlow


@pytest.fixture()
def fake_backend():
    return FakeBackend()


@pytest.fixture()
def flow(fake_backend):
    return CheckoutFlow(fake_backend)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    return Cart.create()


@given(parsers.cfparse("product {product_id:d} priced {price:g} is added with quantity {qty:d}"))
@when(parsers.cfparse("product {product_id:d} priced {price:g} is added with quantity {qty:d}"))
def add_product(cart, product_id, price, qty):
    cart.add_item(Product(id=product_id, name=f"Product {product_id}", price=price), qty)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart holds {lines:d} line(s) with {items:d} item(s)"))
def cart_holds(cart, lines, items):
    assert len(cart.items) == lines
    assert cart.count == items


@then(parsers.cfparse("the cart total is {total:g}"))
def cart_total_is(cart, total):
    assert cart.total == pytest.approx(total)
