from bizdash_control.clients.bizdash_client_sdk.auth_store import AuthStore
from bizdash_control.clients.bizdash_client_sdk.http_client import HttpClient


class SalesClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    async def create(self, sale: dict) -> dict:
        return await self.http.request("POST", "/api/sales", token=self.auth_store.get_token(), json_body=sale)

    async def create_bulk(self, sales: list[dict]) -> dict:
        return await self.http.request(
            "POST",
            "/api/sales/bulk",
            token=self.auth_store.get_token(),
            json_body={"sales": sales},
        )
