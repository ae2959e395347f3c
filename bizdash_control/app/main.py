from __future__ import annotations

import argparse
import asyncio
from collections.abc import Callable, Sequence
from datetime import date

import httpx

from bizdash_control.app.application.bulk_sales import BulkSaleBatch, BulkSaleForm
from bizdash_control.app.application.form_controllers import AddItemForm, AddMenuCategoryForm, AddSaleForm
from bizdash_control.app.application.queries import MenuQuery
from bizdash_control.app.config import AppConfig
from bizdash_control.app.infrastructure.logging.logger import get_logger, log_action
from bizdash_control.app.infrastructure.sdk_adapter.dashboard_adapter import DashboardAdapter
from bizdash_control.app.query_cache import QueryCache
from bizdash_control.app.ui.components.notifications import NotificationPresenter
from bizdash_control.app.ui.components.prediction_widget import PredictionState, PredictionWidget
from bizdash_control.clients.bizdash_client_sdk.auth_store import AuthStore
from bizdash_control.clients.bizdash_client_sdk.http_client import APIError, HttpClient

logger = get_logger("bizdash_control.main")


class DashboardApp:
    """Wires one cache, one notifier and one API adapter into every form and widget."""

    def __init__(
        self,
        config: AppConfig,
        client: httpx.AsyncClient | None = None,
        sink: Callable[[str], None] | None = print,
    ) -> None:
        self.config = config
        self.auth_store = AuthStore(config.access_token)
        self.http = HttpClient(
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            verify_ssl=config.verify_ssl,
            client=client,
        )
        self.http.register_auth_error_handler(self._handle_auth_error)
        self.adapter = DashboardAdapter(http=self.http, auth_store=self.auth_store)
        self.cache = QueryCache()
        self.notifier = NotificationPresenter(sink=sink)
        self._sink = sink

    def _handle_auth_error(self, error: APIError) -> None:
        self.auth_store.clear()
        log_action(logger, "session", "auth_error", trace_id=error.trace_id, outcome=str(error.status_code))
        if self._sink:
            self._sink("[session] Your session is no longer valid. Log in again.")

    def sale_form(self, on_close: Callable[[], None] | None = None) -> AddSaleForm:
        return AddSaleForm(self.adapter, self.cache, self.notifier, on_close=on_close)

    def category_form(self, on_close: Callable[[], None] | None = None) -> AddMenuCategoryForm:
        return AddMenuCategoryForm(self.adapter, self.cache, self.notifier, on_close=on_close)

    def item_form(self, category: str, on_close: Callable[[], None] | None = None) -> AddItemForm:
        return AddItemForm(self.adapter, self.cache, self.notifier, category=category, on_close=on_close)

    def bulk_sale_form(self, start: date, end: date, on_close: Callable[[], None] | None = None) -> BulkSaleForm:
        return BulkSaleForm(
            self.adapter,
            self.cache,
            self.notifier,
            batch=BulkSaleBatch.from_range(start, end),
            on_close=on_close,
        )

    def prediction_widget(self) -> PredictionWidget:
        return PredictionWidget(self.cache, self.adapter.prediction)

    def menu_query(self) -> MenuQuery:
        return MenuQuery(self.cache, self.adapter)

    async def aclose(self) -> None:
        await self.http.aclose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bizdash-control", description="BizDash dashboard client")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("prediction", help="Show projected sales")

    sale = subparsers.add_parser("add-sale", help="Record a day of sales")
    sale.add_argument("--date", type=date.fromisoformat, default=date.today())
    sale.add_argument("--morning", type=int, required=True)
    sale.add_argument("--night", type=int, required=True)
    sale.add_argument("--holiday", default="")

    category = subparsers.add_parser("add-category", help="Create a menu category")
    category.add_argument("--name", required=True)

    item = subparsers.add_parser("add-item", help="Create a menu item")
    item.add_argument("--category", required=True)
    item.add_argument("--name", required=True)
    item.add_argument("--price", type=float, required=True)
    item.add_argument("--description", required=True)
    return parser


async def run_command(app: DashboardApp, args: argparse.Namespace) -> int:
    if args.command == "prediction":
        widget = app.prediction_widget()
        view = await widget.load()
        print(view.render())
        return 0 if view.state == PredictionState.SUCCESS else 1

    if args.command == "add-sale":
        form = app.sale_form()
        fields = {"date": args.date, "morning": args.morning, "night": args.night, "holiday": args.holiday}
    elif args.command == "add-category":
        form = app.category_form()
        fields = {"name": args.name}
    else:
        form = app.item_form(category=args.category)
        fields = {"name": args.name, "price": args.price, "description": args.description}

    for name, value in fields.items():
        form.update_field(name, value)
    outcome = await form.submit()
    if outcome is None:
        print(f"[invalid] {form.form_state().submit_disabled_reason}")
        return 1
    return 0 if outcome.ok else 1


async def _run(args: argparse.Namespace) -> int:
    app = DashboardApp(AppConfig.from_env())
    try:
        return await run_command(app, args)
    finally:
        await app.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
