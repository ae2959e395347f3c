from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from bizdash_control.app.application.mutation_attempts import MutationState, begin_mutation, end_mutation
from bizdash_control.app.domain.models.drafts import CategoryDraft, ItemDraft, SaleDraft
from bizdash_control.app.domain.models.outcome import MutationOutcome
from bizdash_control.app.domain.models.requests import CategoryRequest, ItemRequest, MutationRequest, SaleRequest
from bizdash_control.app.infrastructure.logging.logger import get_logger, log_action
from bizdash_control.app.infrastructure.sdk_adapter.dashboard_adapter import DashboardAdapter
from bizdash_control.app.query_cache import QueryCache
from bizdash_control.app.ui.components.notifications import NotificationPresenter
from bizdash_control.app.ui.formatting import format_long_date
from bizdash_control.app.ui.forms import (
    FormResult,
    FormState,
    FormStatus,
    build_form_state,
    map_api_validation_errors,
    validate_category_draft,
    validate_item_draft,
    validate_sale_draft,
)
from bizdash_control.clients.bizdash_client_sdk.http_client import APIError

FULL_MENU_QUERY_KEY = "fullMenu"

DraftT = TypeVar("DraftT")
RequestT = TypeVar("RequestT", bound=MutationRequest)

logger = get_logger("bizdash_control.forms")


class FormController(Generic[DraftT, RequestT]):
    """Draft -> validate -> single write -> invalidate -> notify -> close.

    ``invalidates`` lists the cache keys a successful write makes stale;
    ``None`` means every cached query.
    """

    operation: str = "form"
    invalidates: tuple[str, ...] | None = None

    def __init__(
        self,
        adapter: DashboardAdapter,
        cache: QueryCache,
        notifier: NotificationPresenter,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.adapter = adapter
        self.cache = cache
        self.notifier = notifier
        self.on_close = on_close
        self.draft: DraftT = self.new_draft()
        self.is_open = True
        self.status = FormStatus.IDLE
        self.server_field_errors: dict[str, str] = {}
        self._mutations = MutationState()

    def new_draft(self) -> DraftT:
        raise NotImplementedError

    def validate(self) -> FormResult[RequestT]:
        raise NotImplementedError

    async def send(self, request: RequestT) -> dict[str, Any]:
        raise NotImplementedError

    def success_message(self, request: RequestT) -> str:
        raise NotImplementedError

    @property
    def in_flight(self) -> bool:
        return self.operation in self._mutations.mutation_in_flight

    def update_field(self, name: str, value: Any) -> None:
        self.draft.update_field(name, value)
        if self.status == FormStatus.IDLE:
            self.status = FormStatus.DIRTY

    def form_state(self) -> FormState:
        state = build_form_state(self.validate())
        if self.in_flight:
            state.status = FormStatus.SUBMITTING
            state.submit_enabled = False
            state.submit_disabled_reason = "Submitting..."
        return state

    async def submit(self) -> MutationOutcome | None:
        result = self.validate()
        if not result.is_valid:
            log_action(
                logger,
                self.operation,
                "submit",
                trace_id=None,
                outcome="skipped_invalid",
                fields=sorted(result.field_errors),
            )
            return None
        if not begin_mutation(self._mutations, self.operation):
            log_action(logger, self.operation, "submit", trace_id=None, outcome="skipped_in_flight")
            return None

        self.status = FormStatus.SUBMITTING
        try:
            response = await self.send(result.request)
        except APIError as error:
            self.status = FormStatus.ERROR
            self.server_field_errors = map_api_validation_errors(error.details)
            self.notifier.mutation_error(error)
            log_action(logger, self.operation, "submit", trace_id=error.trace_id, outcome="failure", code=error.code)
            return MutationOutcome.failure(error.message, code=error.code, trace_id=error.trace_id)
        finally:
            end_mutation(self._mutations, self.operation)

        self._invalidate()
        self.notifier.success(self.success_message(result.request))
        self.status = FormStatus.SUCCESS
        trace_id = response.get("trace_id") if isinstance(response, dict) else None
        log_action(logger, self.operation, "submit", trace_id=trace_id, outcome="success")
        self.close()
        return MutationOutcome.success(trace_id=trace_id)

    def _invalidate(self) -> None:
        if self.invalidates is None:
            self.cache.invalidate()
            return
        for key in self.invalidates:
            self.cache.invalidate(key)

    def close(self) -> None:
        self.draft = self.new_draft()
        self.is_open = False
        self.status = FormStatus.IDLE
        self.server_field_errors = {}
        if self.on_close:
            self.on_close()


class AddSaleForm(FormController[SaleDraft, SaleRequest]):
    operation = "sale-create"
    invalidates = None

    def new_draft(self) -> SaleDraft:
        return SaleDraft()

    def validate(self) -> FormResult[SaleRequest]:
        return validate_sale_draft(self.draft)

    async def send(self, request: SaleRequest) -> dict[str, Any]:
        return await self.adapter.create_sale(request)

    def success_message(self, request: SaleRequest) -> str:
        return f"Sale added successfully for {format_long_date(request.date)}"


class AddMenuCategoryForm(FormController[CategoryDraft, CategoryRequest]):
    operation = "menu-category-create"
    invalidates = (FULL_MENU_QUERY_KEY,)

    def new_draft(self) -> CategoryDraft:
        return CategoryDraft()

    def validate(self) -> FormResult[CategoryRequest]:
        return validate_category_draft(self.draft)

    async def send(self, request: CategoryRequest) -> dict[str, Any]:
        return await self.adapter.create_category(request)

    def success_message(self, request: CategoryRequest) -> str:
        return "Menu category added successfully."


class AddItemForm(FormController[ItemDraft, ItemRequest]):
    operation = "menu-item-create"
    invalidates = (FULL_MENU_QUERY_KEY,)

    def __init__(
        self,
        adapter: DashboardAdapter,
        cache: QueryCache,
        notifier: NotificationPresenter,
        category: str,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.category = category
        super().__init__(adapter, cache, notifier, on_close=on_close)

    def new_draft(self) -> ItemDraft:
        return ItemDraft(category=self.category)

    def validate(self) -> FormResult[ItemRequest]:
        return validate_item_draft(self.draft)

    async def send(self, request: ItemRequest) -> dict[str, Any]:
        return await self.adapter.create_item(request)

    def success_message(self, request: ItemRequest) -> str:
        return f"{request.name} added successfully to {request.category}"
