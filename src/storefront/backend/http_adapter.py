"""HTTP adapter for the catalog service and the order orchestrator.

Talks to the collaborators over `requests`. Any object with requests-style
`get`/`post` methods can stand in for the session, which is how the
integration tests drive a FastAPI fake through its TestClient.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests
import structlog
from pydantic import ValidationError as SchemaError

from storefront.backend.port import (
    ApplicationFailure,
    NetworkFailure,
    OrderPlacement,
    StorefrontBackend,
)
from storefront.backend.schemas import (
    OrderRecord,
    OrderRequest,
    ProcessStartResponse,
    Product,
    ProductListing,
)
from storefront.config import (
    ORDER_PROCESS_START_PATH,
    ORDERS_PATH,
    PRODUCTS_PATH,
    get_api_base_url,
    get_http_timeout,
)

if TYPE_CHECKING:
    from requests import Response

logger = structlog.get_logger(__name__)

ERRMSG_PROCESS_START = "Failed to start process"


def _is_success(response: Response) -> bool:
    return 200 <= response.status_code < 300


def _read_json(response: Response) -> Any:
    """Decode the body; an empty body reads as None."""
    if not response.content:
        return None
    return response.json()


def extract_error_detail(body: Any) -> str | None:
    """Pull an application-level failure message out of a 2xx body.

    Recognised shapes: `{"error": "msg"}`, `{"error": {"field": "msg"}}` and
    `{"success": false, "message": "msg"}`. Returns None when the body does
    not signal a failure.
    """
    if not isinstance(body, dict):
        return None

    if body.get("error"):
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{k}: {v}" for k, v in error.items())
        return str(error)

    if body.get("success") is False:
        return str(body.get("message") or ERRMSG_PROCESS_START)

    return None


class HttpBackend(StorefrontBackend):
    """Production backend talking to the real collaborators."""

    def __init__(
        self,
        base_url: str | None = None,
        session: Any = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else get_http_timeout()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _send(self, method: str, path: str, **kwargs: Any) -> Response:
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        url = self._url(path)
        try:
            response = getattr(self.session, method)(url, **kwargs)
        except requests.RequestException as exc:
            logger.warning("Collaborator unreachable", method=method.upper(), url=url, error=str(exc))
            raise NetworkFailure(f"Network error: {exc}") from exc

        logger.debug("Collaborator replied", method=method.upper(), url=url, status_code=response.status_code)
        return response

    def _fetch_json(self, path: str, what: str) -> Any:
        response = self._send("get", path)
        if not _is_success(response):
            raise ApplicationFailure(f"Failed to load {what} (HTTP {response.status_code})", response.status_code)
        try:
            return _read_json(response)
        except ValueError as exc:
            raise ApplicationFailure(f"Invalid {what} response", response.status_code) from exc

    # -------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------
    def list_products(self) -> list[Product]:
        body = self._fetch_json(PRODUCTS_PATH, "products")
        if body is None:
            return []
        try:
            return ProductListing.model_validate(body).products
        except SchemaError as exc:
            raise ApplicationFailure("Invalid products response") from exc

    # -------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------
    def create_order(self, request: OrderRequest) -> OrderPlacement:
        response = self._send("post", ORDER_PROCESS_START_PATH, json=request.to_process_variables())

        if not _is_success(response):
            logger.warning("Order process rejected", status_code=response.status_code)
            raise ApplicationFailure(ERRMSG_PROCESS_START, response.status_code)

        try:
            body = _read_json(response)
        except ValueError as exc:
            # An empty body is tolerated by _read_json; anything else must parse
            logger.warning("Order process reply is not JSON", status_code=response.status_code)
            raise ApplicationFailure(ERRMSG_PROCESS_START, response.status_code) from exc

        detail = extract_error_detail(body)
        if detail is not None:
            logger.warning("Order process reported failure", status_code=response.status_code, detail=detail)
            raise ApplicationFailure(detail, response.status_code)

        reference = None
        if isinstance(body, dict):
            try:
                started = ProcessStartResponse.model_validate(body)
            except SchemaError:
                started = ProcessStartResponse()
            if started.id is not None:
                reference = str(started.id)

        logger.info("Order process started", order_reference=reference)
        return OrderPlacement(order_reference=reference)

    def list_orders(self) -> list[OrderRecord]:
        body = self._fetch_json(ORDERS_PATH, "orders")
        if body is None:
            return []
        if not isinstance(body, list):
            raise ApplicationFailure("Invalid orders response")
        try:
            return [OrderRecord.model_validate(record) for record in body]
        except SchemaError as exc:
            raise ApplicationFailure("Invalid orders response") from exc
