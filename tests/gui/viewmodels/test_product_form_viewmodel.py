"""Tests for ProductFormViewModel — touched-aware errors and date assist."""

from __future__ import annotations

from datetime import date

import pytest

from conftest import make_product, valid_form_values
from finproducts.gui.viewmodels.filter_store import FilterStore
from finproducts.gui.viewmodels.mutation_coordinator import MutationCoordinator
from finproducts.gui.viewmodels.pagination_store import PaginationStore
from finproducts.gui.viewmodels.product_form_viewmodel import ProductFormViewModel
from finproducts.gui.viewmodels.product_list_viewmodel import ProductListViewModel


@pytest.fixture
def form(repository):
    product_list = ProductListViewModel(repository, FilterStore(), PaginationStore())
    coordinator = MutationCoordinator(repository, product_list)
    return ProductFormViewModel(coordinator)


def _fill(form: ProductFormViewModel, **overrides) -> None:
    for name, value in valid_form_values(**overrides).items():
        form.set_value(name, value)


class TestFieldErrors:
    def test_untouched_fields_show_no_error(self, form):
        assert not form.is_valid
        assert form.field_error("name") == ""
        assert form.is_field_invalid("name") is False

    def test_touched_field_shows_error(self, form):
        form.touch("name")

        assert form.field_error("name") == "name es requerido"
        assert form.is_field_invalid("name")
        assert form.field_error("id") == ""

    def test_error_updates_with_value(self, form):
        form.touch("id")
        form.set_value("id", "ab")
        assert form.field_error("id") == "id debe tener al menos 3 caracteres"

        form.set_value("id", "abc")
        assert form.field_error("id") == ""

    def test_unknown_field(self, form):
        with pytest.raises(KeyError):
            form.set_value("color", "red")


class TestDateAssist:
    def test_release_change_suggests_revision(self, form):
        form.on_date_release_change("2025-04-10")

        assert form.values.value["date_release"] == "2025-04-10"
        assert form.values.value["date_revision"] == "2026-04-10"

    def test_user_can_override_revision(self, form):
        form.on_date_release_change("2025-04-10")
        form.set_value("date_revision", "2025-12-31")

        assert form.values.value["date_revision"] == "2025-12-31"

    def test_invalid_release_leaves_revision_alone(self, form):
        form.set_value("date_revision", "2026-01-01")
        form.on_date_release_change("")

        assert form.values.value["date_revision"] == "2026-01-01"


class TestSubmit:
    async def test_invalid_form_touches_all_and_sends_nothing(self, form, repository):
        result = await form.submit()

        assert result is None
        assert repository.calls == []
        assert form.field_error("logo") == "logo es requerido"

    async def test_valid_form_creates(self, form, repository):
        submitted = []
        form.submitted.connect(submitted.append)
        _fill(form)

        product = await form.submit()

        assert product.id == "trj-crd"
        assert submitted == [product]
        assert repository.count("create") == 1
        assert form.is_submitting.value is False

    async def test_edit_mode_updates_and_locks_id(self, form, repository):
        form.load_product(make_product("product-3", "Préstamo Personal", "Préstamo de libre inversión"))
        form.set_value("id", "changed")
        form.set_value("name", "Préstamo Hipotecario")

        product = await form.submit()

        assert form.is_edit_mode
        assert form.values.value["id"] == "product-3"
        assert product.id == "product-3"
        assert repository.calls[0][0:2] == ("update", "product-3")

    def test_load_product_formats_dates_for_inputs(self, form):
        form.load_product(make_product("p-1", date_release=date(2025, 2, 3), date_revision=date(2026, 2, 3)))

        assert form.values.value["date_release"] == "2025-02-03"
        assert form.values.value["date_revision"] == "2026-02-03"
        assert form.touched.value == frozenset()


class TestReset:
    def test_reset_clears_values_and_touched(self, form):
        _fill(form)
        form.touch_all()

        form.reset()

        assert form.values.value["name"] == ""
        assert form.touched.value == frozenset()

    def test_reset_in_edit_mode_keeps_id(self, form):
        form.load_product(make_product("product-1"))

        form.reset()

        assert form.values.value["id"] == "product-1"
        assert form.values.value["name"] == ""
