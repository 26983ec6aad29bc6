"""BDD tests for cart line management."""

from pytest_bdd import parsers, scenarios, when

scenarios("features/cart.feature")


@when(parsers.cfparse("the quantity of product {product_id:d} is set to {qty:d}"))
def set_quantity(cart, product_id, qty):
    cart.set_quantity(product_id, qty)


@when(parsers.cfparse("product {product_id:d} is removed"))
def remove_product(cart, product_id):
    cart.remove_item(product_id)
