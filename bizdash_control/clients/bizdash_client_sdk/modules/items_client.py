from bizdash_control.clients.bizdash_client_sdk.auth_store import AuthStore
from bizdash_control.clients.bizdash_client_sdk.http_client import HttpClient


class ItemsClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    async def create(self, item: dict) -> dict:
        return await self.http.request("POST", "/api/items", token=self.auth_store.get_token(), json_body=item)
