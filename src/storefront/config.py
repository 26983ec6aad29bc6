"""Runtime settings for the storefront client."""

import os

DEFAULT_API_BASE_URL = "http://localhost:9090"

PRODUCTS_PATH = "/esb/api/products"
ORDERS_PATH = "/esb/api/oms/orders"
ORDER_PROCESS_START_PATH = "/camunda/engine-rest/process-definition/key/order_delivery/start"


def get_api_base_url() -> str:
    """Base URL shared by the catalog and the order orchestrator."""
    return os.getenv("STOREFRONT_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")


def get_http_timeout() -> float | None:
    """Transport timeout in seconds, or None to wait indefinitely."""
    raw = os.getenv("STOREFRONT_HTTP_TIMEOUT")
    if not raw:
        return None
    return float(raw)
