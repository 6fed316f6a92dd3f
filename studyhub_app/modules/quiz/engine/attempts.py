# File: studyhub_app/modules/quiz/engine/attempts.py
"""Attempt records and the fire-and-forget hand-off to a persistence gateway."""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Callable, Hashable, Optional, Protocol

logger = logging.getLogger(__name__)

STATUS_COMPLETED = 'completed'


@dataclass(frozen=True)
class AttemptRecord:
    quiz_id: Hashable
    user_id: Optional[Hashable]
    score: int
    max_score: int
    status: str = STATUS_COMPLETED

    def to_dict(self) -> dict:
        return asdict(self)


class AttemptGateway(Protocol):
    """Stores a completed attempt. Retries, if any, are the gateway's business."""

    def record_attempt(self, record: AttemptRecord) -> None:
        ...


Dispatcher = Callable[[AttemptGateway, AttemptRecord], Optional[threading.Thread]]


def _record_and_log(gateway: AttemptGateway, record: AttemptRecord) -> None:
    try:
        gateway.record_attempt(record)
    except Exception as exc:
        logger.error(
            "Saving attempt failed for quiz=%s user=%s (score %s/%s): %s",
            record.quiz_id, record.user_id, record.score, record.max_score, exc,
            exc_info=True,
        )
    else:
        logger.info(
            "Attempt saved for quiz=%s user=%s (score %s/%s)",
            record.quiz_id, record.user_id, record.score, record.max_score,
        )


def dispatch_inline(gateway: AttemptGateway, record: AttemptRecord) -> None:
    """Store the attempt on the calling thread; failures are logged only."""
    _record_and_log(gateway, record)


def dispatch_in_background(gateway: AttemptGateway, record: AttemptRecord) -> threading.Thread:
    """Store the attempt on a detached daemon thread; failures are logged only."""
    thread = threading.Thread(
        target=_record_and_log,
        args=(gateway, record),
        name=f"quiz-attempt-{record.quiz_id}",
        daemon=True,
    )
    thread.start()
    return thread
