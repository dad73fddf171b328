"""User-facing toast notifications."""

from typing import Literal

from pydantic import BaseModel

Level = Literal["success", "error", "warning", "info"]


class Toast(BaseModel):
    message: str
    level: Level = "info"


class Notifier:
    """Sink for user-facing messages. The default implementation drops them."""

    def notify(self, message: str, level: Level = "info") -> None:
        pass


class ToastQueue(Notifier):
    """Collects toasts so a page or API response can display them."""

    def __init__(self):
        self.toasts: list[Toast] = []

    def notify(self, message: str, level: Level = "info") -> None:
        self.toasts.append(Toast(message=message, level=level))

    def drain(self) -> list[Toast]:
        toasts, self.toasts = self.toasts, []
        return toasts
