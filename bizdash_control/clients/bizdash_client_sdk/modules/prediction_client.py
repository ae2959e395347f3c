from bizdash_control.clients.bizdash_client_sdk.auth_store import AuthStore
from bizdash_control.clients.bizdash_client_sdk.http_client import HttpClient


class PredictionClient:
    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    async def get(self) -> dict:
        return await self.http.request("GET", "/api/prediction", token=self.auth_store.get_token())
