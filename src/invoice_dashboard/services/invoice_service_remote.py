"""
HTTP implementation of InvoiceService for the invoice API.

Every invoice endpoint answers with an envelope:

    {"data": <payload>, "success": true, "message": null}

The envelope's success flag is always checked; a false value raises
ApiError with the server message. Transport failures and non-2xx statuses
raise NetworkError (404 raises NotFoundError). Bodies that are not JSON or
do not convert to the expected models raise ApiError. Nothing is retried.

Payloads are read through benedict so missing or null nested keys fall
back to defaults instead of raising KeyError.

Optional Environment Variables:
    INVOICE_DASHBOARD_API_URL: Base URL of the API
    INVOICE_DASHBOARD_HTTP_TIMEOUT: Per-request timeout in seconds (none by default)
"""

import os
from typing import Any, Callable, TypeVar

import httpx
from benedict import benedict

from invoice_dashboard.errors import ApiError, NetworkError, NotFoundError
from invoice_dashboard.lib import logs
from invoice_dashboard.models.common import ApiResponse, PaginatedList
from invoice_dashboard.models.invoice import (
    InvoiceDetail,
    InvoiceListView,
    deserialize_invoice,
    serialize_invoice,
)
from invoice_dashboard.services.invoice_service import InvoiceService

LOG = logs.logger(__file__)

T = TypeVar("T")

DEFAULT_API_URL = "http://localhost:5000/"


def api_url() -> str:
    """Return the configured API base URL, always ending with a slash."""
    url = os.getenv("INVOICE_DASHBOARD_API_URL", DEFAULT_API_URL) or DEFAULT_API_URL
    return url if url.endswith("/") else f"{url}/"


def http_timeout() -> float | None:
    """Return the configured request timeout, or None for no timeout."""
    value = os.getenv("INVOICE_DASHBOARD_HTTP_TIMEOUT")
    return float(value) if value else None


def build_client(base_url: str | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient used by the remote services."""
    return httpx.AsyncClient(
        base_url=base_url or api_url(),
        timeout=http_timeout(),
        headers={"Content-Type": "application/json"},
    )


def parse_envelope(
    payload: Any, data_factory: Callable[[Any], T]
) -> ApiResponse[T]:
    """
    Parse an API envelope, converting its data with data_factory.

    Data is only converted when the envelope reports success.
    """
    b = benedict(payload if isinstance(payload, dict) else {}, keyattr_dynamic=True)
    success = bool(b.get("success", False))
    data = b.get("data")
    return ApiResponse(
        data=data_factory(data) if success and data is not None else None,
        success=success,
        message=b.get("message"),
    )


class RemoteInvoiceService(InvoiceService):
    """
    Invoice service talking to the invoice API over HTTP.

    Attributes:
        client: httpx.AsyncClient configured with the API base URL.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """
        Initialize the service.

        Args:
            client: Preconfigured client, or None to build one from the
                    environment.
        """
        self.client = client or build_client()

    async def list_paginated(
        self, page_index: int = 0, page_size: int = 10
    ) -> PaginatedList[InvoiceListView]:
        return await self._request(
            "GET",
            "api/invoices/paginated",
            lambda data: PaginatedList.from_dict(data, InvoiceListView.from_dict),
            params={"pageIndex": page_index, "pageSize": page_size},
        )

    async def get_by_id(self, invoice_id: int) -> InvoiceDetail:
        return await self._request(
            "GET",
            f"api/invoices/{invoice_id}",
            deserialize_invoice,
            invoice_id=invoice_id,
        )

    async def create(self, invoice: InvoiceDetail) -> InvoiceDetail:
        created = await self._request(
            "POST",
            "api/invoices",
            deserialize_invoice,
            json=serialize_invoice(invoice),
        )
        LOG.info("Created invoice %s (%s)", created.id, created.invoice_number)
        return created

    async def update(self, invoice_id: int, invoice: InvoiceDetail) -> InvoiceDetail:
        updated = await self._request(
            "PUT",
            f"api/invoices/{invoice_id}",
            deserialize_invoice,
            invoice_id=invoice_id,
            json=serialize_invoice(invoice.with_id(invoice_id)),
        )
        LOG.info("Updated invoice %s", invoice_id)
        return updated

    async def delete(self, invoice_id: int) -> bool:
        result = await self._request(
            "DELETE",
            f"api/invoices/{invoice_id}",
            lambda data: bool(data),
            invoice_id=invoice_id,
        )
        return result is not False

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        data_factory: Callable[[Any], T],
        invoice_id: int | None = None,
        **kwargs: Any,
    ) -> T:
        """Send a request, check the envelope and return the converted payload."""
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return parse_envelope(response.json(), data_factory).unwrap()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 404 and invoice_id is not None:
                raise NotFoundError(invoice_id) from exc
            LOG.error("%s %s failed with status %s", method, path, status_code)
            raise NetworkError(
                f"{method} {path} failed with status {status_code}", status_code
            ) from exc
        except httpx.HTTPError as exc:
            LOG.error("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"{method} {path} failed: {exc}") from exc
        except (ValueError, TypeError, AttributeError) as exc:
            LOG.error("%s %s returned an invalid body: %s", method, path, exc)
            raise ApiError(f"{method} {path} returned an invalid body") from exc
