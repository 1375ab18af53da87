"""In-memory registry of evaluator pages, one per browser session."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, Optional, Tuple
from uuid import uuid4

from app import config
from app.ui.notifier import ToastQueue
from app.ui.page import EvaluatorPage

logger = logging.getLogger(__name__)


def _default_page_factory() -> EvaluatorPage:
    return EvaluatorPage(notifier=ToastQueue())


class PageSessionStore:
    """Keep the evaluator page of each session for a limited time.

    Nothing is written to disk; an expired or unknown session simply starts
    over with an empty page.
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        page_factory: Callable[[], EvaluatorPage] = _default_page_factory,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else config.SESSION_TTL_SECONDS)
        self._page_factory = page_factory
        self._lock = Lock()
        self._store: Dict[str, Dict[str, object]] = {}

    def _purge_expired(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [
            session_id
            for session_id, entry in self._store.items()
            if now - entry["timestamp"] > self._ttl  # type: ignore[operator]
            and not entry["page"].is_pending  # type: ignore[attr-defined]
        ]
        for session_id in expired:
            self._store.pop(session_id, None)
        if expired:
            logger.debug("%d süresi dolmuş oturum temizlendi", len(expired))

    def get_or_create(self, session_id: Optional[str]) -> Tuple[str, EvaluatorPage]:
        with self._lock:
            self._purge_expired()
            entry = self._store.get(session_id) if session_id else None
            if entry is None:
                session_id = uuid4().hex
                entry = {"page": self._page_factory()}
                self._store[session_id] = entry
                logger.debug("Yeni sayfa oturumu oluşturuldu: %s", session_id)
            entry["timestamp"] = datetime.now(timezone.utc)
            return session_id, entry["page"]  # type: ignore[return-value]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)


__all__ = ["PageSessionStore"]
