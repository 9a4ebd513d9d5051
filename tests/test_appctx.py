from __future__ import annotations

from pathlib import Path

import pytest

from conftest import FakeProductRepository
from finproducts.appctx import AppContext
from finproducts.gui.viewmodels.product_form_viewmodel import ProductFormViewModel
from finproducts.infrastructure.http_repository import HttpProductRepository
from finproducts.settings.manager import SettingsManager


@pytest.fixture
def settings(tmp_path: Path) -> SettingsManager:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()
    return manager


def test_wires_collaborators(settings, repository):
    ctx = AppContext(settings=settings, repository=repository)

    assert ctx.product_list.filter_store is ctx.filters
    assert ctx.product_list.pagination_store is ctx.pagination
    assert ctx.pagination.current().items_per_page == 5
    assert isinstance(ctx.create_form(), ProductFormViewModel)


def test_page_size_comes_from_settings(settings, repository):
    settings.set("ui.items_per_page", 10)

    ctx = AppContext(settings=settings, repository=repository)

    assert ctx.pagination.current().items_per_page == 10


async def test_default_repository_uses_configured_url(settings):
    settings.set("api.base_url", "http://catalogue.test/")

    ctx = AppContext(settings=settings)

    assert isinstance(ctx.repository, HttpProductRepository)
    assert ctx.repository._url() == "http://catalogue.test/bp/products"
    await ctx.aclose()


async def test_context_manager_tears_down(settings, repository: FakeProductRepository):
    async with AppContext(settings=settings, repository=repository) as ctx:
        await ctx.product_list.reload()
        assert len(ctx.product_list.displayed.value) == 3

    assert repository.closed
    assert ctx.product_list.is_disposed
    assert ctx.filters.changes().subscriber_count == 0


async def test_errors_reach_the_ui_callback(settings, repository, transport_error):
    ctx = AppContext(settings=settings, repository=repository)
    shown = []
    ctx.error_handler.register_ui_callback(lambda message, severity: shown.append(message))
    repository.fail_with = transport_error

    await ctx.product_list.reload()

    assert shown == [ctx.product_list.error_message.value]
    await ctx.aclose()
