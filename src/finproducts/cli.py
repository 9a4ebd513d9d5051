"""Typer-based CLI entry point."""

from __future__ import annotations

import asyncio
import functools
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .appctx import AppContext
from .domain.dates import default_revision_date, format_input_date
from .domain.models import FinancialProduct
from .errors import FinProductsError, ProductNotFoundError, ValidationError
from .settings.manager import SettingsManager
from .utils.logging import configure_logging

T = TypeVar("T")

app = typer.Typer(help="Browse and edit the financial products catalogue")

_state: dict = {"settings_path": None, "verbose": False}


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as exc:
            for _, message in sorted(exc.field_errors.items()):
                typer.echo(f"Error: {message}", err=True)
            raise typer.Exit(1) from exc
        except FinProductsError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _run(action: Callable[[AppContext], Awaitable[T]]) -> T:
    settings = SettingsManager(_state["settings_path"])
    settings.load()
    configure_logging("DEBUG" if _state["verbose"] else settings.get("logging.level", "INFO"))

    async def _main() -> T:
        async with AppContext(settings=settings) as ctx:
            return await action(ctx)

    return asyncio.run(_main())


async def _load(ctx: AppContext) -> None:
    await ctx.product_list.reload()
    if ctx.product_list.error_message.value:
        raise FinProductsError(ctx.product_list.error_message.value)


def _find(ctx: AppContext, product_id: str) -> FinancialProduct:
    for product in ctx.product_list.raw_products:
        if product.id == product_id:
            return product
    raise ProductNotFoundError(f"Product '{product_id}' not found")


def _render(ctx: AppContext) -> None:
    vm = ctx.product_list
    table = Table(title=vm.results_text())
    for header in ("ID", "Nombre", "Descripción", "Liberación", "Reestructuración"):
        table.add_column(header)
    for product in vm.displayed.value:
        table.add_row(
            product.id,
            product.name,
            product.description,
            vm.format_date(product.date_release),
            vm.format_date(product.date_revision),
        )
    console = Console()
    console.print(table)
    window = ctx.pagination.current()
    console.print(f"Página {window.current_page} de {max(vm.total_pages(), 1)}")


@app.callback()
def main(
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    _state["settings_path"] = settings_path
    _state["verbose"] = verbose


@app.command("list")
@_handle_errors
def list_products(
    search: str = typer.Option("", "--search", "-s", help="Filter by name, description or id"),
    page: int = typer.Option(1, "--page", min=1),
    per_page: Optional[int] = typer.Option(None, "--per-page", min=1),
) -> None:
    """Show one page of the (optionally filtered) catalogue."""

    async def action(ctx: AppContext) -> None:
        await _load(ctx)
        if per_page is not None:
            ctx.product_list.change_items_per_page(per_page)
        ctx.product_list.search(search)
        for _ in range(page - 1):
            ctx.product_list.next_page()
        _render(ctx)

    _run(action)


@app.command()
@_handle_errors
def create(
    product_id: str = typer.Option(..., "--id"),
    name: str = typer.Option(..., "--name"),
    description: str = typer.Option(..., "--description"),
    logo: str = typer.Option(..., "--logo"),
    release: str = typer.Option(..., "--release", help="Release date (yyyy-mm-dd)"),
    revision: Optional[str] = typer.Option(None, "--revision", help="Defaults to release + 1 year"),
) -> None:
    """Create a product."""

    values = {
        "id": product_id,
        "name": name,
        "description": description,
        "logo": logo,
        "date_release": release,
        "date_revision": revision or format_input_date(default_revision_date(release)),
    }

    async def action(ctx: AppContext) -> Optional[FinancialProduct]:
        return await ctx.mutations.submit(values)

    product = _run(action)
    if product is None:
        raise typer.Exit(1)
    print(f"[green]Created product {product.id}")


@app.command()
@_handle_errors
def update(
    product_id: str = typer.Argument(...),
    name: Optional[str] = typer.Option(None, "--name"),
    description: Optional[str] = typer.Option(None, "--description"),
    logo: Optional[str] = typer.Option(None, "--logo"),
    release: Optional[str] = typer.Option(None, "--release"),
    revision: Optional[str] = typer.Option(None, "--revision"),
) -> None:
    """Update the given fields of an existing product."""

    async def action(ctx: AppContext) -> Optional[FinancialProduct]:
        await _load(ctx)
        form = ctx.create_form()
        form.load_product(_find(ctx, product_id))
        for field, value in (("name", name), ("description", description), ("logo", logo)):
            if value is not None:
                form.set_value(field, value)
        if release is not None:
            form.on_date_release_change(release)
        if revision is not None:
            form.set_value("date_revision", revision)
        if not form.is_valid:
            raise ValidationError(form.errors)
        return await form.submit()

    product = _run(action)
    if product is None:
        raise typer.Exit(1)
    print(f"[green]Updated product {product.id}")


@app.command()
@_handle_errors
def delete(product_id: str = typer.Argument(...)) -> None:
    """Delete a product."""

    async def action(ctx: AppContext) -> bool:
        await _load(ctx)
        return await ctx.mutations.delete(_find(ctx, product_id))

    if not _run(action):
        raise typer.Exit(1)
    print(f"[green]Deleted product {product_id}")


if __name__ == "__main__":  # pragma: no cover
    app()
