# File: studyhub_app/modules/quiz/engine/timer.py
"""Countdown that forces a single submission when time runs out."""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger(__name__)


class SessionTimer:
    """Calls ``session.tick()`` once per interval on a daemon thread.

    ``tick()`` returns ``False`` once the session is submitted (manually or by
    the expiry tick itself), which ends the loop. ``cancel()`` stops the
    countdown from outside; it never blocks.
    """

    def __init__(self, session, interval: float = 1.0):
        self._session = session
        self._interval = interval
        self._stopped = threading.Event()
        self._thread = None

    def start(self) -> None:
        if self._thread is not None or self._stopped.is_set():
            return
        self._thread = threading.Thread(target=self._run, name="quiz-session-timer", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def join(self, timeout: float = None) -> None:
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self) -> None:
        try:
            while not self._stopped.wait(self._interval):
                if not self._session.tick():
                    break
        except Exception as exc:
            logger.error("Quiz timer stopped unexpectedly: %s", exc, exc_info=True)
        finally:
            self._stopped.set()
