from bizdash_control.app.domain.models.requests import BulkSaleRequest, CategoryRequest, ItemRequest, SaleRequest
from bizdash_control.clients.bizdash_client_sdk.auth_store import AuthStore
from bizdash_control.clients.bizdash_client_sdk.http_client import HttpClient
from bizdash_control.clients.bizdash_client_sdk.modules.items_client import ItemsClient
from bizdash_control.clients.bizdash_client_sdk.modules.menu_client import MenuClient
from bizdash_control.clients.bizdash_client_sdk.modules.prediction_client import PredictionClient
from bizdash_control.clients.bizdash_client_sdk.modules.sales_client import SalesClient


class DashboardAdapter:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.sales = SalesClient(http=http, auth_store=auth_store)
        self.menu = MenuClient(http=http, auth_store=auth_store)
        self.items = ItemsClient(http=http, auth_store=auth_store)
        self.prediction = PredictionClient(http=http, auth_store=auth_store)

    async def create_sale(self, request: SaleRequest) -> dict:
        return await self.sales.create(request.to_payload())

    async def create_sales(self, request: BulkSaleRequest) -> dict:
        return await self.sales.create_bulk(request.to_payload()["sales"])

    async def create_category(self, request: CategoryRequest) -> dict:
        return await self.menu.create_category(request.name)

    async def create_item(self, request: ItemRequest) -> dict:
        return await self.items.create(request.to_payload())

    async def full_menu(self) -> dict:
        return await self.menu.full_menu()
