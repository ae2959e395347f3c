from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from bizdash_control.clients.bizdash_client_sdk.http_client import APIError


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    id: int
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    def render(self) -> str:
        tag = "error" if self.variant == NotificationVariant.DESTRUCTIVE else "success"
        return f"[{tag}] {self.title}: {self.description}"


class NotificationPresenter:
    """Transient, dismissible messages for mutation outcomes.

    Only the newest ``limit`` notifications stay visible; everything shown is
    kept in ``history``.
    """

    def __init__(self, sink: Callable[[str], None] | None = print, limit: int = 1) -> None:
        self._sink = sink
        self.limit = max(1, limit)
        self.visible: list[Notification] = []
        self.history: list[Notification] = []
        self._ids = itertools.count(1)

    def toast(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        notification = Notification(id=next(self._ids), title=title, description=description, variant=variant)
        self.visible = [notification, *self.visible][: self.limit]
        self.history.append(notification)
        if self._sink:
            self._sink(notification.render())
        return notification

    def success(self, description: str) -> Notification:
        return self.toast("Success", description)

    def error(self, description: str) -> Notification:
        return self.toast("Error", description, variant=NotificationVariant.DESTRUCTIVE)

    def mutation_error(self, error: APIError) -> Notification:
        return self.error(error.message)

    def dismiss(self, notification_id: int | None = None) -> None:
        if notification_id is None:
            self.visible = []
            return
        self.visible = [item for item in self.visible if item.id != notification_id]

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None
