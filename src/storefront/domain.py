"""Storefront bounded context — cart, checkout and client-side navigation.

Holds the shopping cart (a CQRS aggregate living only for the session), the
checkout flow that hands the cart to the order orchestrator, and the router
that decides which page is active.
"""

from protean.domain import Domain

from storefront.utils.logging import get_logger

storefront = Domain(name="storefront")

logger = get_logger(__name__)
