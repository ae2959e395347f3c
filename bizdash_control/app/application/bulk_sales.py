from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from bizdash_control.app.application.form_controllers import FormController
from bizdash_control.app.domain.models.drafts import BulkSaleRowDraft
from bizdash_control.app.domain.models.requests import BulkSaleRequest
from bizdash_control.app.infrastructure.sdk_adapter.dashboard_adapter import DashboardAdapter
from bizdash_control.app.query_cache import QueryCache
from bizdash_control.app.ui.components.notifications import NotificationPresenter
from bizdash_control.app.ui.forms import FormResult, FormStatus, validate_bulk_sale_drafts


@dataclass
class BulkSaleRow:
    row_id: int
    draft: BulkSaleRowDraft


class BulkSaleBatch:
    """Ordered per-date sale drafts.

    Positions are renumbered after a removal so indices stay contiguous;
    ``row_id`` never changes and is what row controllers hold on to.
    """

    def __init__(self) -> None:
        self.rows: list[BulkSaleRow] = []
        self._ids = itertools.count(1)

    @classmethod
    def from_range(cls, start: date, end: date) -> "BulkSaleBatch":
        if end < start:
            raise ValueError("end date must not be before start date")
        batch = cls()
        for offset in range((end - start).days + 1):
            batch.add_row(start + timedelta(days=offset))
        return batch

    def __len__(self) -> int:
        return len(self.rows)

    def add_row(self, sale_date: date) -> BulkSaleRow:
        row = BulkSaleRow(row_id=next(self._ids), draft=BulkSaleRowDraft(date=sale_date))
        self.rows.append(row)
        return row

    def _row_at(self, index: int) -> BulkSaleRow:
        if not 0 <= index < len(self.rows):
            raise IndexError(f"row index {index} out of range")
        return self.rows[index]

    def update_field(self, index: int, field_name: str, value: Any) -> None:
        self._row_at(index).draft.update_field(field_name, value)

    def remove_row(self, index: int) -> BulkSaleRow:
        row = self._row_at(index)
        del self.rows[index]
        return row

    def index_of(self, row_id: int) -> int:
        for index, row in enumerate(self.rows):
            if row.row_id == row_id:
                return index
        raise LookupError(f"row {row_id} was removed")

    def drafts(self) -> list[BulkSaleRowDraft]:
        return [row.draft for row in self.rows]

    def row_controller(self, index: int) -> "BulkSaleRowController":
        return BulkSaleRowController(self, self._row_at(index).row_id)


class BulkSaleRowController:
    def __init__(self, batch: BulkSaleBatch, row_id: int) -> None:
        self.batch = batch
        self.row_id = row_id

    @property
    def index(self) -> int:
        return self.batch.index_of(self.row_id)

    @property
    def draft(self) -> BulkSaleRowDraft:
        return self.batch.rows[self.index].draft

    def update_field(self, field_name: str, value: Any) -> None:
        self.batch.update_field(self.index, field_name, value)

    def remove(self) -> None:
        self.batch.remove_row(self.index)


class BulkSaleForm(FormController[BulkSaleBatch, BulkSaleRequest]):
    operation = "sale-bulk-create"
    invalidates = None

    def __init__(
        self,
        adapter: DashboardAdapter,
        cache: QueryCache,
        notifier: NotificationPresenter,
        batch: BulkSaleBatch | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(adapter, cache, notifier, on_close=on_close)
        if batch is not None:
            self.draft = batch

    def new_draft(self) -> BulkSaleBatch:
        return BulkSaleBatch()

    def update_field(self, index: int, field_name: str, value: Any) -> None:
        self.draft.update_field(index, field_name, value)
        if self.status == FormStatus.IDLE:
            self.status = FormStatus.DIRTY

    def remove_row(self, index: int) -> None:
        self.draft.remove_row(index)

    def validate(self) -> FormResult[BulkSaleRequest]:
        return validate_bulk_sale_drafts(self.draft.drafts())

    async def send(self, request: BulkSaleRequest) -> dict[str, Any]:
        return await self.adapter.create_sales(request)

    def success_message(self, request: BulkSaleRequest) -> str:
        count = len(request.sales)
        noun = "sale" if count == 1 else "sales"
        return f"{count} {noun} added successfully"
