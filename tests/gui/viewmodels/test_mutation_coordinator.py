"""Tests for MutationCoordinator — single-flight create/update/delete."""

from __future__ import annotations

import asyncio

import pytest

from conftest import FakeProductRepository, make_product, valid_form_values
from finproducts.config import DELETE_ERROR_MESSAGE, SAVE_ERROR_MESSAGE
from finproducts.domain.models import MutationKind, PendingMutation
from finproducts.errors import ValidationError
from finproducts.events.bus import EventBus
from finproducts.events.product_events import (
    ProductCreatedEvent,
    ProductDeletedEvent,
    ProductUpdatedEvent,
)
from finproducts.gui.viewmodels.filter_store import FilterStore
from finproducts.gui.viewmodels.mutation_coordinator import MutationCoordinator
from finproducts.gui.viewmodels.pagination_store import PaginationStore
from finproducts.gui.viewmodels.product_list_viewmodel import ProductListViewModel


def _make_coordinator(repository: FakeProductRepository, event_bus: EventBus | None = None):
    product_list = ProductListViewModel(repository, FilterStore(), PaginationStore())
    coordinator = MutationCoordinator(repository, product_list, event_bus=event_bus)
    return coordinator, product_list


class TestSubmit:
    async def test_create_then_reload(self, repository):
        bus = EventBus()
        created = []
        bus.subscribe(ProductCreatedEvent, created.append)
        coordinator, product_list = _make_coordinator(repository, bus)

        product = await coordinator.submit(valid_form_values())

        assert product is not None and product.id == "trj-crd"
        assert repository.count("create") == 1
        assert repository.count("list") == 1
        assert "trj-crd" in [p.id for p in product_list.raw_products]
        assert coordinator.is_pending is False
        assert [e.product.id for e in created] == ["trj-crd"]

    async def test_update_targets_id(self, repository):
        bus = EventBus()
        updated = []
        bus.subscribe(ProductUpdatedEvent, updated.append)
        coordinator, product_list = _make_coordinator(repository, bus)

        values = valid_form_values(id="product-2", name="Cuenta Premium")
        product = await coordinator.submit(values, product_id="product-2")

        assert product.name == "Cuenta Premium"
        assert repository.calls[0][0:2] == ("update", "product-2")
        names = {p.id: p.name for p in product_list.raw_products}
        assert names["product-2"] == "Cuenta Premium"
        assert len(updated) == 1

    async def test_invalid_values_never_reach_repository(self, repository):
        coordinator, _ = _make_coordinator(repository)

        with pytest.raises(ValidationError) as info:
            await coordinator.submit(valid_form_values(name="abc"))

        assert info.value.field_errors == {"name": "name debe tener al menos 5 caracteres"}
        assert repository.calls == []
        assert coordinator.is_pending is False

    async def test_unreadable_dates_never_reach_repository(self, repository):
        coordinator, _ = _make_coordinator(repository)
        values = valid_form_values(date_release="not-a-date", date_revision="2025-13-45")

        with pytest.raises(ValidationError) as info:
            await coordinator.submit(values)

        assert set(info.value.field_errors) == {"date_release", "date_revision"}
        assert repository.count("create") == 0
        assert coordinator.is_pending is False

    async def test_transport_failure_keeps_list_and_allows_retry(self, repository, transport_error):
        coordinator, product_list = _make_coordinator(repository)
        await product_list.reload()
        before = product_list.raw_products
        errors = []
        coordinator.error_occurred.connect(errors.append)

        repository.fail_with = transport_error
        result = await coordinator.submit(valid_form_values())

        assert result is None
        assert errors == [SAVE_ERROR_MESSAGE]
        assert coordinator.last_error.value == SAVE_ERROR_MESSAGE
        assert coordinator.is_pending is False
        assert repository.count("list") == 1
        assert product_list.raw_products == before

        repository.fail_with = None
        assert await coordinator.submit(valid_form_values()) is not None
        assert coordinator.last_error.value == ""

    async def test_concurrent_submit_is_ignored(self, repository):
        coordinator, _ = _make_coordinator(repository)
        repository.gate = asyncio.get_running_loop().create_future()

        first = asyncio.create_task(coordinator.submit(valid_form_values()))
        await asyncio.sleep(0)
        assert coordinator.pending.value == PendingMutation(kind=MutationKind.CREATE)

        second = await coordinator.submit(valid_form_values(id="otro-id"))
        ignored_delete = await coordinator.delete(make_product("product-1"))

        assert second is None
        assert ignored_delete is False
        assert repository.count("create") == 1
        assert repository.count("delete") == 0

        repository.gate.set_result(None)
        assert (await first) is not None
        assert coordinator.is_pending is False

    async def test_pending_held_until_reload_finishes(self, repository):
        coordinator, _ = _make_coordinator(repository)
        states = []
        coordinator.pending.changed.connect(lambda new, old: states.append(new))

        await coordinator.submit(valid_form_values())

        assert states[0].kind is MutationKind.CREATE
        assert states[-1] is None
        assert len(states) == 2


class TestDelete:
    async def test_delete_then_reload(self, repository):
        bus = EventBus()
        deleted = []
        bus.subscribe(ProductDeletedEvent, deleted.append)
        coordinator, product_list = _make_coordinator(repository, bus)
        await product_list.reload()

        ok = await coordinator.delete(product_list.raw_products[0])

        assert ok is True
        assert "product-1" not in [p.id for p in product_list.raw_products]
        assert [e.product_id for e in deleted] == ["product-1"]

    async def test_delete_failure(self, repository, transport_error):
        coordinator, product_list = _make_coordinator(repository)
        await product_list.reload()
        repository.fail_with = transport_error

        ok = await coordinator.delete(product_list.raw_products[0])

        assert ok is False
        assert coordinator.last_error.value == DELETE_ERROR_MESSAGE
        assert len(product_list.raw_products) == 3
        assert coordinator.is_pending is False
