from bizdash_control.clients.bizdash_client_sdk.auth_store import AuthStore
from bizdash_control.clients.bizdash_client_sdk.http_client import HttpClient


class MenuClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    async def full_menu(self) -> dict:
        return await self.http.request("GET", "/api/menu", token=self.auth_store.get_token())

    async def create_category(self, name: str) -> dict:
        return await self.http.request(
            "POST",
            "/api/menu",
            token=self.auth_store.get_token(),
            json_body={"name": name},
        )
