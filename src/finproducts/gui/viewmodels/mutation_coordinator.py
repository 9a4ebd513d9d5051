"""Single-flight create/update/delete against the product repository."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Mapping, Optional

from finproducts.config import DELETE_ERROR_MESSAGE, SAVE_ERROR_MESSAGE
from finproducts.domain.models import FinancialProduct, MutationKind, PendingMutation
from finproducts.domain.repositories import IProductRepository
from finproducts.domain.validation import ensure_valid
from finproducts.errors import ConcurrentMutationError, TransportError
from finproducts.errors.handler import ErrorHandler, ErrorSeverity
from finproducts.events.bus import EventBus
from finproducts.events.product_events import (
    ProductCreatedEvent,
    ProductDeletedEvent,
    ProductUpdatedEvent,
)
from finproducts.gui.viewmodels.product_list_viewmodel import ProductListViewModel
from finproducts.gui.viewmodels.signal import ObservableProperty, Signal


class MutationCoordinator:
    """Run at most one mutation at a time and reload the list on success.

    * A request made while another is pending is ignored: no repository call.
    * Invalid form values raise :class:`ValidationError` before any call.
    * A :class:`TransportError` is logged and reported through
      ``error_occurred``; the list is not reloaded and the coordinator is
      ready for a manual retry.
    """

    def __init__(
        self,
        repository: IProductRepository,
        product_list: ProductListViewModel,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self._repository = repository
        self._product_list = product_list
        self._event_bus = event_bus
        self._error_handler = error_handler
        self._logger = logging.getLogger(__name__)

        self.pending = ObservableProperty(None)
        self.last_error = ObservableProperty("")

        self.mutation_succeeded = Signal()  # emits (kind, product_or_id)
        self.error_occurred = Signal()

    @property
    def is_pending(self) -> bool:
        return self.pending.value is not None

    async def submit(
        self,
        form_values: Mapping[str, Any],
        product_id: Optional[str] = None,
    ) -> Optional[FinancialProduct]:
        """Create a product, or update *product_id* when given.

        Returns the stored product, or ``None`` when the request was ignored
        or failed in transport.
        """
        kind = MutationKind.CREATE if product_id is None else MutationKind.UPDATE
        try:
            self._acquire(PendingMutation(kind=kind, target_id=product_id))
        except ConcurrentMutationError as exc:
            self._logger.debug("Ignoring %s: %s", kind.value, exc)
            return None

        try:
            ensure_valid(form_values)
            fields = dict(form_values)
            if kind is MutationKind.CREATE:
                call = partial(self._repository.create, fields)
            else:
                call = partial(self._repository.update, product_id, fields)
            product = await self._run(kind, call, SAVE_ERROR_MESSAGE)
            if product is None:
                return None

            self._logger.info("%s product %s", kind.value.capitalize(), product.id)
            if self._event_bus is not None:
                event_cls = ProductCreatedEvent if kind is MutationKind.CREATE else ProductUpdatedEvent
                self._event_bus.publish(event_cls(product=product))
            self.mutation_succeeded.emit(kind, product)
            await self._product_list.reload()
            return product
        finally:
            self._release()

    async def delete(self, product: FinancialProduct) -> bool:
        """Delete *product*; ``True`` once the store confirmed it."""
        try:
            self._acquire(PendingMutation(kind=MutationKind.DELETE, target_id=product.id))
        except ConcurrentMutationError as exc:
            self._logger.debug("Ignoring delete: %s", exc)
            return False

        try:
            deleted = await self._run(
                MutationKind.DELETE,
                partial(self._delete_call, product.id),
                DELETE_ERROR_MESSAGE,
            )
            if not deleted:
                return False

            self._logger.info("Deleted product %s", product.id)
            if self._event_bus is not None:
                self._event_bus.publish(ProductDeletedEvent(product_id=product.id))
            self.mutation_succeeded.emit(MutationKind.DELETE, product.id)
            await self._product_list.reload()
            return True
        finally:
            self._release()

    # -- internal ----------------------------------------------------------

    def _acquire(self, mutation: PendingMutation) -> None:
        current = self.pending.value
        if current is not None:
            raise ConcurrentMutationError(
                f"{current.kind.value} of {current.target_id or 'new product'} still pending"
            )
        self.last_error.value = ""
        self.pending.value = mutation

    def _release(self) -> None:
        self.pending.value = None

    async def _delete_call(self, product_id: str) -> bool:
        await self._repository.delete(product_id)
        return True

    async def _run(
        self,
        kind: MutationKind,
        call: Callable[[], Awaitable[Any]],
        user_message: str,
    ) -> Any:
        try:
            return await call()
        except TransportError as exc:
            if self._error_handler is not None:
                self._error_handler.handle(
                    exc,
                    ErrorSeverity.ERROR,
                    user_message=user_message,
                    context={"operation": kind.value},
                )
            else:
                self._logger.error("Error during %s: %s", kind.value, exc)
            self.last_error.value = user_message
            self.error_occurred.emit(user_message)
            return None
