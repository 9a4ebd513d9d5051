from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Dict, List, Optional

import pytest

from finproducts.domain.models import FinancialProduct
from finproducts.domain.repositories import IProductRepository
from finproducts.errors import TransportError


def make_product(
    product_id: str,
    name: str = "Producto de prueba",
    description: str = "Descripción de prueba",
    **overrides: Any,
) -> FinancialProduct:
    fields: Dict[str, Any] = {
        "id": product_id,
        "name": name,
        "description": description,
        "logo": f"https://example.com/{product_id}.png",
        "date_release": date(2025, 1, 1),
        "date_revision": date(2026, 1, 1),
    }
    fields.update(overrides)
    return FinancialProduct(**fields)


def valid_form_values(**overrides: Any) -> Dict[str, Any]:
    values = {
        "id": "trj-crd",
        "name": "Tarjeta de Crédito",
        "description": "Tarjeta de consumo bajo la modalidad de crédito",
        "logo": "https://example.com/logo.png",
        "date_release": "2025-01-01",
        "date_revision": "2026-01-01",
    }
    values.update(overrides)
    return values


class FakeProductRepository(IProductRepository):
    """In-memory repository that records calls.

    Set ``gate`` to an ``asyncio.Future`` to hold every call until it resolves,
    or ``fail_with`` to make the next calls raise.
    """

    def __init__(self, products: Optional[List[FinancialProduct]] = None) -> None:
        self.products: List[FinancialProduct] = list(products or [])
        self.calls: List[tuple] = []
        self.gate: Optional[asyncio.Future] = None
        self.fail_with: Optional[Exception] = None
        self.closed = False

    async def _checkpoint(self) -> None:
        if self.gate is not None:
            await self.gate
        if self.fail_with is not None:
            raise self.fail_with

    async def list(self) -> List[FinancialProduct]:
        self.calls.append(("list",))
        await self._checkpoint()
        return list(self.products)

    async def create(self, fields: Dict[str, Any]) -> FinancialProduct:
        self.calls.append(("create", dict(fields)))
        await self._checkpoint()
        product = FinancialProduct.from_dict(fields)
        self.products.append(product)
        return product

    async def update(self, product_id: str, fields: Dict[str, Any]) -> FinancialProduct:
        self.calls.append(("update", product_id, dict(fields)))
        await self._checkpoint()
        product = FinancialProduct.from_dict({**fields, "id": product_id})
        self.products = [product if p.id == product_id else p for p in self.products]
        return product

    async def delete(self, product_id: str) -> None:
        self.calls.append(("delete", product_id))
        await self._checkpoint()
        self.products = [p for p in self.products if p.id != product_id]

    async def aclose(self) -> None:
        self.closed = True

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def catalogue() -> List[FinancialProduct]:
    return [
        make_product("product-1", "Tarjeta de Crédito", "Tarjeta de consumo bajo la modalidad de crédito"),
        make_product("product-2", "Cuenta de Ahorros", "Cuenta para ahorrar con intereses"),
        make_product("product-3", "Préstamo Personal", "Préstamo de libre inversión"),
    ]


@pytest.fixture
def repository(catalogue) -> FakeProductRepository:
    return FakeProductRepository(catalogue)


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("Error Code: 500 Message: Internal Server Error", status_code=500)
