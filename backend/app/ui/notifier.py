"""Transient notifications shown after a submission completes."""

from abc import ABC, abstractmethod
from threading import Lock
from typing import List, Literal

from pydantic import BaseModel

ToastKind = Literal["success", "destructive"]


class Toast(BaseModel):
    kind: ToastKind
    title: str
    message: str


class Notifier(ABC):
    """Capability the page uses to surface a notification."""

    @abstractmethod
    def notify(self, kind: ToastKind, title: str, message: str) -> None:
        raise NotImplementedError


class ToastQueue(Notifier):
    """Keep toasts until the next page render consumes them."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._toasts: List[Toast] = []

    def notify(self, kind: ToastKind, title: str, message: str) -> None:
        with self._lock:
            self._toasts.append(Toast(kind=kind, title=title, message=message))

    def drain(self) -> List[Toast]:
        with self._lock:
            toasts, self._toasts = self._toasts, []
        return toasts

    def __len__(self) -> int:
        with self._lock:
            return len(self._toasts)
