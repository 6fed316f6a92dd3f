# File: studyhub_app/modules/quiz/services/attempt_gateway.py
"""SQLAlchemy-backed attempt persistence."""

from __future__ import annotations

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from studyhub_app.core.signals import quiz_attempt_recorded
from studyhub_app.models import QuizAttempt, db

from ..engine.attempts import AttemptRecord
from ..engine.errors import PersistenceFailure


class SqlAttemptGateway:
    """Inserts one ``quiz_attempts`` row per record.

    Holds the app itself rather than relying on a request context, because
    timer-triggered submissions and background dispatch run on other threads.
    """

    def __init__(self, app: Flask):
        self._app = app

    def record_attempt(self, record: AttemptRecord) -> None:
        with self._app.app_context():
            attempt = QuizAttempt(
                quiz_id=record.quiz_id,
                user_id=record.user_id,
                score=record.score,
                max_score=record.max_score,
                status=record.status,
            )
            try:
                db.session.add(attempt)
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceFailure(details={'quiz_id': record.quiz_id, 'reason': str(exc)}) from exc

            quiz_attempt_recorded.send(
                self._app,
                attempt_id=attempt.attempt_id,
                quiz_id=record.quiz_id,
                user_id=record.user_id,
                score=record.score,
                max_score=record.max_score,
            )
