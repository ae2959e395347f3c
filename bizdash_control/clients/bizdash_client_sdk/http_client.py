from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class APIError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "APIError":
        header_trace_id = response.headers.get("X-Trace-ID") or response.headers.get("X-Trace-Id")
        try:
            payload = response.json()
        except ValueError:
            return cls(
                code="HTTP_ERROR",
                message=response.text or "HTTP request failed",
                trace_id=header_trace_id,
                status_code=response.status_code,
            )

        if isinstance(payload, dict):
            return cls(
                code=str(payload.get("code") or "HTTP_ERROR"),
                message=str(payload.get("message") or response.text or "HTTP request failed"),
                details=payload.get("details"),
                trace_id=payload.get("trace_id") or header_trace_id,
                status_code=response.status_code,
            )

        return cls(
            code="HTTP_ERROR",
            message=response.text or "HTTP request failed",
            details=payload,
            trace_id=header_trace_id,
            status_code=response.status_code,
        )


class HttpClient:
    """Async JSON client for the dashboard API.

    Every call is a single attempt: failures are raised as ``APIError`` and
    recovery is left to the caller.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30,
        verify_ssl: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            verify=verify_ssl,
        )
        self._auth_error_handler: Callable[[APIError], None] | None = None

    def register_auth_error_handler(self, handler: Callable[[APIError], None] | None) -> None:
        self._auth_error_handler = handler

    async def request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        request_headers = dict(headers or {})
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        normalized_path = path if path.startswith("/") else f"/{path}"

        try:
            response = await self._client.request(
                method=method,
                url=normalized_path,
                json=json_body,
                headers=request_headers,
                params=params,
            )
        except httpx.TimeoutException as exc:
            raise APIError(
                code="TIMEOUT_ERROR",
                message="The request timed out. Check your connection and try again.",
                details=str(exc),
            ) from exc
        except httpx.TransportError as exc:
            raise APIError(
                code="NETWORK_ERROR",
                message="Could not reach the dashboard API.",
                details=str(exc),
            ) from exc
        except httpx.RequestError as exc:
            raise APIError(
                code="NETWORK_ERROR",
                message="The dashboard API returned an unreadable response.",
                details=str(exc),
            ) from exc

        if response.status_code >= 400:
            error = APIError.from_http_response(response)
            if error.status_code in {401, 403} and self._auth_error_handler:
                self._auth_error_handler(error)
            raise error

        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {"items": payload}

    async def aclose(self) -> None:
        await self._client.aclose()
