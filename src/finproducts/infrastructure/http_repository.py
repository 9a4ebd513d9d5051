"""HTTP implementation of :class:`IProductRepository` backed by ``httpx``."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from finproducts.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    PRODUCTS_ENDPOINT,
)
from finproducts.domain.dates import format_input_date
from finproducts.domain.models import FinancialProduct
from finproducts.domain.repositories import IProductRepository
from finproducts.errors import TransportError

LOGGER = logging.getLogger(__name__)


class HttpProductRepository(IProductRepository):
    """Talk to the remote catalogue over HTTP.

    ``list()`` expects ``{"data": [...]}``; the mutation endpoints accept and
    return the flat product shape.  Every transport failure, including
    non-2xx answers, surfaces as :class:`TransportError`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SEC,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    # -- IProductRepository ----------------------------------------------

    async def list(self) -> List[FinancialProduct]:
        payload = await self._request("GET", self._url())
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise TransportError("Malformed product list response: missing 'data' array")
        if not all(isinstance(item, dict) for item in payload["data"]):
            raise TransportError("Malformed product list response: non-object entry in 'data'")
        return [FinancialProduct.from_dict(item) for item in payload["data"]]

    async def create(self, fields: Dict[str, Any]) -> FinancialProduct:
        body = _serialise(fields)
        payload = await self._request("POST", self._url(), json=body)
        return FinancialProduct.from_dict(payload or body)

    async def update(self, product_id: str, fields: Dict[str, Any]) -> FinancialProduct:
        body = _serialise(fields)
        body.pop("id", None)
        payload = await self._request("PUT", self._url(product_id), json=body)
        return FinancialProduct.from_dict(payload or {**body, "id": product_id})

    async def delete(self, product_id: str) -> None:
        await self._request("DELETE", self._url(product_id), expect_body=False)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # -- internal ----------------------------------------------------------

    def _url(self, product_id: Optional[str] = None) -> str:
        url = f"{self._base_url}{PRODUCTS_ENDPOINT}"
        if product_id is not None:
            url = f"{url}/{product_id}"
        return url

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        expect_body: bool = True,
    ) -> Any:
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.TimeoutException as exc:
            raise TransportError(f"{method} {url} timed out") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"Error Code: {response.status_code} Message: {response.reason_phrase}",
                status_code=response.status_code,
            )

        LOGGER.debug("%s %s -> %s", method, url, response.status_code)
        if not expect_body or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
            ) from exc


def _serialise(fields: Dict[str, Any]) -> Dict[str, Any]:
    body = dict(fields)
    for key in ("date_release", "date_revision"):
        if key in body:
            body[key] = format_input_date(body[key])
    return body
