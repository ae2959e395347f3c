from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from bizdash_control.app.infrastructure.logging.logger import get_logger, log_action

logger = get_logger("bizdash_control.query_cache")


class QueryStatus(str, Enum):
    PENDING = "pending"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class QueryResult:
    status: QueryStatus
    value: Any = None
    error: Exception | None = None


@dataclass
class QueryCacheEntry:
    key: str
    status: QueryStatus
    value: Any = None
    error: Exception | None = None
    stale: bool = False
    updated_at: float = 0.0

    def to_result(self) -> QueryResult:
        return QueryResult(status=self.status, value=self.value, error=self.error)


Fetcher = Callable[[], Awaitable[Any]]
InvalidationListener = Callable[[tuple[str, ...]], None]


class QueryCache:
    """Shared store of fetched query results with explicit invalidation.

    An entry is refetched only when it is absent or stale. Errors stay cached
    until someone invalidates the key, so nothing retries on its own.
    """

    def __init__(self, stale_after_seconds: float | None = None, now: Callable[[], float] | None = None) -> None:
        self.stale_after_seconds = stale_after_seconds
        self._now = now or time.monotonic
        self._entries: dict[str, QueryCacheEntry] = {}
        self._inflight: dict[str, asyncio.Future] = {}
        self._invalidated_inflight: set[str] = set()
        self._listeners: list[InvalidationListener] = []

    def peek(self, key: str) -> QueryResult | None:
        entry = self._entries.get(key)
        return entry.to_result() if entry else None

    def entry(self, key: str) -> QueryCacheEntry | None:
        return self._entries.get(key)

    def is_stale(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None or entry.stale:
            return True
        if entry.status in (QueryStatus.PENDING, QueryStatus.ERROR):
            return False
        if self.stale_after_seconds is None:
            return False
        return entry.updated_at + self.stale_after_seconds <= self._now()

    async def fetch(self, key: str, fetcher: Fetcher) -> QueryResult:
        inflight = self._inflight.get(key)
        if inflight is not None:
            return await asyncio.shield(inflight)

        if not self.is_stale(key):
            return self._entries[key].to_result()

        previous = self._entries.get(key)
        self._entries[key] = QueryCacheEntry(
            key=key,
            status=QueryStatus.PENDING,
            value=previous.value if previous else None,
            updated_at=self._now(),
        )
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            try:
                value = await fetcher()
            except Exception as error:
                entry = QueryCacheEntry(key=key, status=QueryStatus.ERROR, error=error, updated_at=self._now())
                log_action(logger, "query_cache", f"fetch:{key}", trace_id=getattr(error, "trace_id", None), outcome="error")
            else:
                entry = QueryCacheEntry(key=key, status=QueryStatus.SUCCESS, value=value, updated_at=self._now())
                log_action(logger, "query_cache", f"fetch:{key}", trace_id=None, outcome="success")
            if key in self._invalidated_inflight:
                entry.stale = True
            self._entries[key] = entry
            result = entry.to_result()
            future.set_result(result)
            return result
        finally:
            self._inflight.pop(key, None)
            self._invalidated_inflight.discard(key)
            if not future.done():
                self._entries[key].stale = True
                future.cancel()

    def invalidate(self, key: str | None = None) -> tuple[str, ...]:
        if key is None:
            keys = tuple(self._entries)
            self._invalidated_inflight.update(self._inflight)
        else:
            keys = (key,) if key in self._entries else ()
            if key in self._inflight:
                self._invalidated_inflight.add(key)
        for stale_key in keys:
            self._entries[stale_key].stale = True
        log_action(logger, "query_cache", f"invalidate:{key or '*'}", trace_id=None, outcome="ok")
        for listener in list(self._listeners):
            listener(keys)
        return keys

    def subscribe(self, listener: InvalidationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def clear(self) -> None:
        self._entries.clear()
