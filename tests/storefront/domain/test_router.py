"""Tests for route registration and location resolution."""

import pytest
from storefront.routing.history import History
from storefront.routing.router import RouteMatch, Router, compile_pattern


@pytest.fixture()
def router():
    router = Router()
    router.register_route("/", "home")
    router.register_route("/cart", "cart")
    router.register_route("/checkout", "checkout")
    router.register_route("/orders", "orders")
    return router


class TestResolve:
    def test_root_resolves_to_home(self, router):
        assert router.resolve("/") == RouteMatch(pattern="/", view_id="home", params={})

    def test_literal_routes(self, router):
        assert router.resolve("/cart").view_id == "cart"
        assert router.resolve("/checkout").view_id == "checkout"
        assert router.resolve("/orders").view_id == "orders"

    def test_unknown_location_is_no_match(self, router):
        assert router.resolve("/unknown") is None

    def test_empty_location_is_root(self, router):
        assert router.resolve("").view_id == "home"
        assert router.resolve(None).view_id == "home"

    def test_hash_and_missing_slash_are_normalized(self, router):
        assert router.resolve("#/cart").view_id == "cart"
        assert router.resolve("cart").view_id == "cart"

    def test_no_prefix_matches(self, router):
        assert router.resolve("/cart/extra") is None
        assert router.resolve("/carts") is None
        assert router.resolve("/cart/") is None


class TestParameters:
    def test_parameter_binds_segment(self):
        router = Router()
        router.register_route("/orders/:orderId", "order")
        match = router.resolve("/orders/42")
        assert match.view_id == "order"
        assert match.params == {"orderId": "42"}

    def test_multiple_parameters(self):
        router = Router()
        router.register_route("/shops/:shop/products/:product", "product")
        match = router.resolve("/shops/north/products/bike-7")
        assert match.params == {"shop": "north", "product": "bike-7"}

    def test_parameter_needs_exactly_one_non_empty_segment(self):
        router = Router()
        router.register_route("/orders/:orderId", "order")
        assert router.resolve("/orders/") is None
        assert router.resolve("/orders/1/2") is None

    def test_literal_segments_are_not_regex(self):
        router = Router()
        router.register_route("/a.b", "dotted")
        assert router.resolve("/a.b").view_id == "dotted"
        assert router.resolve("/axb") is None

    def test_invalid_parameter_name(self):
        with pytest.raises(ValueError):
            compile_pattern("/orders/:")
        with pytest.raises(ValueError):
            compile_pattern("/orders/:1st")

    def test_duplicate_parameter_name(self):
        with pytest.raises(ValueError):
            compile_pattern("/:id/:id")


class TestRegistrationOrder:
    def test_first_registered_wins(self):
        router = Router()
        router.register_route("/products/:id", "product")
        router.register_route("/products/new", "new-product")
        assert router.resolve("/products/new").view_id == "product"

    def test_duplicates_are_kept(self):
        router = Router()
        router.register_route("/cart", "first")
        router.register_route("/cart", "second")
        assert len(router.routes) == 2
        assert router.resolve("/cart").view_id == "first"


class TestLocationChanges:
    def test_current_follows_history(self, router):
        router.history.navigate("/orders")
        assert router.current().view_id == "orders"

    def test_callback_receives_new_location(self):
        history = History()
        router = Router(history)
        seen = []
        with router.on_location_change(seen.append):
            history.navigate("#/cart")
            history.navigate("/orders")
        assert seen == ["/cart", "/orders"]

    def test_subscription_released_on_exit(self):
        history = History()
        router = Router(history)
        seen = []
        with router.on_location_change(seen.append):
            pass
        history.navigate("/cart")
        assert seen == []
        assert history.listener_count == 0

    def test_subscription_released_when_block_raises(self):
        history = History()
        router = Router(history)
        with pytest.raises(RuntimeError):
            with router.on_location_change(lambda location: None):
                raise RuntimeError("boom")
        assert history.listener_count == 0

    def test_repeated_scopes_do_not_leak(self):
        history = History()
        router = Router(history)
        seen = []
        for _ in range(3):
            with router.on_location_change(seen.append):
                pass
        with router.on_location_change(seen.append):
            history.navigate("/cart")
        assert seen == ["/cart"]
        assert history.listener_count == 0
