"""Order history page.

Statuses come from the order service and are an open set. Known ones get a
badge tone; anything else is shown neutral. Casing for display happens here
and nowhere else.
"""

from datetime import UTC, datetime
from enum import Enum

import structlog

from storefront.backend.port import BackendError, StorefrontBackend
from storefront.backend.schemas import OrderRecord
from storefront.views.base import Page, format_amount

logger = structlog.get_logger(__name__)


class OrderStatus(Enum):
    FULFILLMENT_REQUESTED = "fulfillment_requested"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"


class BadgeTone(Enum):
    PENDING = "pending"
    INFO = "info"
    SUCCESS = "success"
    NEUTRAL = "neutral"


_TONES = {
    OrderStatus.FULFILLMENT_REQUESTED: BadgeTone.PENDING,
    OrderStatus.CONFIRMED: BadgeTone.INFO,
    OrderStatus.COMPLETED: BadgeTone.SUCCESS,
}


def parse_status(raw: str) -> OrderStatus | None:
    """Known status for `raw` (any casing), or None for one we have never seen."""
    try:
        return OrderStatus((raw or "").lower())
    except ValueError:
        return None


def status_tone(raw: str) -> BadgeTone:
    status = parse_status(raw)
    return _TONES.get(status, BadgeTone.NEUTRAL)


def status_label(raw: str) -> str:
    """`FULFILLMENT_REQUESTED` → `Fulfillment_requested`."""
    lowered = (raw or "").lower()
    return lowered[:1].upper() + lowered[1:]


def _created_sort_key(order: OrderRecord) -> datetime:
    # Naive timestamps are taken as UTC so they sort alongside aware ones
    created = order.created_at
    return created if created.tzinfo else created.replace(tzinfo=UTC)


class OrdersPage(Page):
    view_id = "orders"

    def __init__(self, backend: StorefrontBackend) -> None:
        self.backend = backend
        self.orders: list[OrderRecord] = []
        self.loading = True
        self.error: str | None = None

    def open(self) -> None:
        self.load()

    def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.orders = self.backend.list_orders()
        except BackendError as exc:
            logger.warning("Could not load orders", error=str(exc))
            self.error = str(exc)
        finally:
            self.loading = False

    @property
    def is_empty(self) -> bool:
        return not self.loading and self.error is None and not self.orders

    def sorted_orders(self) -> list[OrderRecord]:
        """Newest first."""
        return sorted(self.orders, key=_created_sort_key, reverse=True)

    def line_amounts(self, order: OrderRecord) -> list[tuple[str, str]]:
        return [(f"{line.product_name} × {line.quantity}", format_amount(line.subtotal)) for line in order.items]
