from datetime import UTC, datetime

import pytest
from protean.integrations.pytest import DomainFixture
from storefront.backend.fake_adapter import FakeBackend
from storefront.backend.schemas import OrderLine, OrderRecord, Product


@pytest.fixture(scope="session")
def storefront_bed():
    # Register every domain element before the domain is initialized
    import storefront.app  # noqa: F401
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def cart():
    from storefront.cart.cart import Cart

    return Cart.create()


@pytest.fixture()
def products():
    return [
        Product(id=1, name="Road Bike", description="Aluminium frame", price=5, stock=4, image="🚲"),
        Product(id=2, name="Helmet", description="Size M", price=3, stock=10),
        Product(id=3, name="Pump", description="Floor pump", price=12.5, stock=0),
    ]


@pytest.fixture()
def orders():
    return [
        OrderRecord(
            id=101,
            status="CONFIRMED",
            created_at=datetime(2026, 3, 1, 9, 30, tzinfo=UTC),
            items=[OrderLine(product_name="Helmet", unit_price=3, quantity=2)],
            total_amount=6,
            currency="TND",
        ),
        OrderRecord(
            id=102,
            status="fulfillment_requested",
            created_at=datetime(2026, 3, 4, 17, 5, tzinfo=UTC),
            items=[OrderLine(product_name="Road Bike", unit_price=5, quantity=1)],
            total_amount=5,
            currency="TND",
        ),
    ]


@pytest.fixture()
def backend(products, orders):
    return FakeBackend(products=products, orders=orders)
