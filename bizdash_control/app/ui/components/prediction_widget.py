from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from bizdash_control.app.infrastructure.logging.logger import get_logger, log_action
from bizdash_control.app.query_cache import QueryCache, QueryStatus
from bizdash_control.clients.bizdash_client_sdk.http_client import APIError
from bizdash_control.clients.bizdash_client_sdk.modules.prediction_client import PredictionClient

PREDICTION_QUERY_KEY = "prediction"

logger = get_logger("bizdash_control.prediction")


class PredictionState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class PredictionView:
    state: PredictionState
    morning: str | None = None
    night: str | None = None
    error_message: str | None = None
    retry_available: bool = False

    def render(self) -> str:
        if self.state == PredictionState.SUCCESS:
            return f"Projected Sales | AM: ${self.morning} | PM: ${self.night}"
        if self.state == PredictionState.ERROR:
            return "Error Loading Prediction [↻]"
        return "Loading..."


def parse_prediction(payload: dict) -> tuple[float, float]:
    morning = payload.get("morningPrediction")
    night = payload.get("nightPrediction")
    for name, value in (("morningPrediction", morning), ("nightPrediction", night)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise APIError(code="INVALID_PAYLOAD", message=f"Prediction payload is missing '{name}'.")
        if not math.isfinite(value):
            raise APIError(code="INVALID_PAYLOAD", message=f"Prediction payload has a non-finite '{name}'.")
    return float(morning), float(night)


class PredictionWidget:
    def __init__(self, cache: QueryCache, client: PredictionClient) -> None:
        self.cache = cache
        self.client = client

    async def _fetch(self) -> tuple[float, float]:
        return parse_prediction(await self.client.get())

    def view(self) -> PredictionView:
        result = self.cache.peek(PREDICTION_QUERY_KEY)
        if result is None or result.status == QueryStatus.PENDING:
            return PredictionView(state=PredictionState.LOADING)
        if result.status == QueryStatus.ERROR:
            return PredictionView(
                state=PredictionState.ERROR,
                error_message=str(result.error) if result.error else None,
                retry_available=True,
            )
        morning, night = result.value
        return PredictionView(
            state=PredictionState.SUCCESS,
            morning=str(math.floor(morning)),
            night=str(math.floor(night)),
        )

    async def load(self) -> PredictionView:
        await self.cache.fetch(PREDICTION_QUERY_KEY, self._fetch)
        view = self.view()
        log_action(logger, "prediction", "load", trace_id=None, outcome=view.state.value)
        return view

    async def refresh(self) -> PredictionView:
        self.cache.invalidate(PREDICTION_QUERY_KEY)
        return await self.load()

    def render(self) -> str:
        return self.view().render()
