from bizdash_control.app.application.form_controllers import FULL_MENU_QUERY_KEY
from bizdash_control.app.infrastructure.sdk_adapter.dashboard_adapter import DashboardAdapter
from bizdash_control.app.query_cache import QueryCache, QueryResult


class MenuQuery:
    def __init__(self, cache: QueryCache, adapter: DashboardAdapter) -> None:
        self.cache = cache
        self.adapter = adapter

    async def load(self) -> QueryResult:
        return await self.cache.fetch(FULL_MENU_QUERY_KEY, self.adapter.full_menu)

    def peek(self) -> QueryResult | None:
        return self.cache.peek(FULL_MENU_QUERY_KEY)
