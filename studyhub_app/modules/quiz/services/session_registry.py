# File: studyhub_app/modules/quiz/services/session_registry.py
"""In-process registry of live quiz play sessions.

The browser only carries an opaque play token in its Flask session; the
``QuizSession`` object (with its lock and timer thread) lives here.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Optional

from studyhub_app.extensions import scheduler

from ..config import QuizModuleDefaultConfig
from ..engine.session import QuizSession

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    session: QuizSession
    last_seen: float


class QuizSessionRegistry:
    """Thread-safe token -> QuizSession map.

    Sessions idle for more than ``max_idle_seconds`` are abandoned whenever a
    new one starts and by the ``prune_quiz_sessions`` scheduler job. A falsy
    ``max_idle_seconds`` keeps them until they are abandoned explicitly.
    """

    def __init__(
        self,
        max_idle_seconds: Optional[float] = QuizModuleDefaultConfig.QUIZ_SESSION_IDLE_TIMEOUT_SECONDS,
        clock=time.monotonic,
    ):
        self._lock = threading.Lock()
        self._entries: dict[str, _Entry] = {}
        self._max_idle = max_idle_seconds
        self._clock = clock

    def start(self, session: QuizSession, replaces: Optional[str] = None) -> str:
        """Register ``session`` and return its token.

        ``replaces`` is the token of the play session this browser had before;
        that session is abandoned (without submitting) first.
        """
        if replaces:
            self.abandon(replaces)
        if self._max_idle:
            self.prune(self._max_idle)
        token = secrets.token_urlsafe(16)
        with self._lock:
            self._entries[token] = _Entry(session, last_seen=self._clock())
        session.start_timer()
        logger.debug("Registered play session %s for quiz=%s", token, session.quiz_id)
        return token

    def get(self, token: Optional[str]) -> Optional[QuizSession]:
        if not token:
            return None
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            entry.last_seen = self._clock()
            return entry.session

    def abandon(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            entry = self._entries.pop(token, None)
        if entry is None:
            return False
        entry.session.abandon()
        return True

    def prune(self, max_idle_seconds: float, now: Optional[float] = None) -> int:
        """Abandon sessions untouched for longer than ``max_idle_seconds``."""
        now = self._clock() if now is None else now
        with self._lock:
            stale = [token for token, entry in self._entries.items() if now - entry.last_seen > max_idle_seconds]
            entries = [self._entries.pop(token) for token in stale]
        for entry in entries:
            entry.session.abandon()
        if entries:
            logger.info("Pruned %s idle quiz play sessions", len(entries))
        return len(entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, token) -> bool:
        with self._lock:
            return token in self._entries


def prune_abandoned_sessions() -> int:
    """Scheduler job: drop idle play sessions of the running app."""
    app = scheduler.app
    with app.app_context():
        registry = app.extensions.get('quiz_sessions')
        if registry is None:
            return 0
        max_idle = app.config.get(
            'QUIZ_SESSION_IDLE_TIMEOUT_SECONDS',
            QuizModuleDefaultConfig.QUIZ_SESSION_IDLE_TIMEOUT_SECONDS,
        )
        return registry.prune(max_idle)
