# File: studyhub_app/modules/quiz/engine/session.py
"""Quiz play session: answer collection, navigation and one-time submission."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Hashable, Optional

from studyhub_app.core.signals import quiz_submitted

from .answers import AnswerStore
from .attempts import AttemptGateway, AttemptRecord, Dispatcher, dispatch_in_background
from .questions import Question, QuestionSet
from .scoring import BandTable, ScoreResult, score
from .timer import SessionTimer

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ACTIVE = 'active'
    SUBMITTED = 'submitted'


class QuizSession:
    """
    One learner's pass through a quiz.

    The session is ``ACTIVE`` until the first ``submit()`` (manual or from
    the timer), then ``SUBMITTED`` for good. Learner requests and timer ticks
    are serialised on one re-entrant lock, and the submitted flag is checked
    and set inside it, so scoring and the attempt hand-off run exactly once.
    """

    def __init__(
        self,
        questions: QuestionSet,
        *,
        quiz_id: Hashable = None,
        user_id: Hashable = None,
        time_limit_seconds: Optional[int] = None,
        attempt_gateway: Optional[AttemptGateway] = None,
        dispatcher: Dispatcher = dispatch_in_background,
        bands: Optional[BandTable] = None,
        tick_interval: float = 1.0,
    ):
        self._lock = threading.RLock()
        self._questions = questions
        self._answers = AnswerStore(questions)
        self._index = 0
        self._result: Optional[ScoreResult] = None
        self._submit_trigger: Optional[str] = None
        self.quiz_id = quiz_id
        self.user_id = user_id
        self._gateway = attempt_gateway
        self._dispatcher = dispatcher
        self._bands = bands

        if time_limit_seconds and time_limit_seconds > 0:
            self.remaining_seconds: Optional[int] = int(time_limit_seconds)
            self._timer: Optional[SessionTimer] = SessionTimer(self, interval=tick_interval)
        else:
            self.remaining_seconds = None
            self._timer = None

        logger.debug(
            "QuizSession created for quiz=%s user=%s (%s questions, limit=%s)",
            quiz_id, user_id, len(questions), self.remaining_seconds,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def questions(self) -> QuestionSet:
        return self._questions

    @property
    def current_question_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Optional[Question]:
        if not self._questions:
            return None
        return self._questions[self._index]

    @property
    def state(self) -> SessionState:
        return SessionState.SUBMITTED if self._result is not None else SessionState.ACTIVE

    @property
    def submitted(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[ScoreResult]:
        return self._result

    @property
    def submit_trigger(self) -> Optional[str]:
        return self._submit_trigger

    @property
    def timer(self) -> Optional[SessionTimer]:
        return self._timer

    def answer_for(self, question_id: Hashable) -> Any:
        return self._answers.get(question_id)

    # ------------------------------------------------------------------
    # Learner operations
    # ------------------------------------------------------------------
    def record_answer(self, question_id: Hashable, value: Any) -> Any:
        with self._lock:
            return self._answers.record(question_id, value)

    def toggle_multiple_choice_option(self, question_id: Hashable, option_index: int) -> frozenset:
        with self._lock:
            return self._answers.toggle(question_id, option_index)

    def go_to_next(self) -> int:
        with self._lock:
            if not self.submitted and self._index < len(self._questions) - 1:
                self._index += 1
            return self._index

    def go_to_previous(self) -> int:
        with self._lock:
            if not self.submitted and self._index > 0:
                self._index -= 1
            return self._index

    def submit(self) -> ScoreResult:
        """Submit the session; repeated calls return the first result unchanged."""
        with self._lock:
            if self._result is not None:
                return self._result
            result = self._transition_to_submitted('manual')
        self._after_submit(result)
        return result

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------
    def start_timer(self) -> None:
        if self._timer is not None and not self.submitted:
            self._timer.start()

    def tick(self) -> bool:
        """Advance the countdown by one second.

        Returns ``False`` when the countdown is over: either the session was
        already submitted, or this tick found no time left and submitted it.
        """
        with self._lock:
            if self._result is not None or self.remaining_seconds is None:
                return False
            if self.remaining_seconds > 0:
                self.remaining_seconds -= 1
                return True
            self.remaining_seconds = 0
            result = self._transition_to_submitted('timer')
        self._after_submit(result)
        return False

    def abandon(self) -> None:
        """Drop the session without submitting; nothing is persisted."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        logger.debug("QuizSession for quiz=%s abandoned (submitted=%s)", self.quiz_id, self.submitted)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _transition_to_submitted(self, trigger: str) -> ScoreResult:
        # Caller holds the lock and has checked that no result exists yet.
        snapshot = self._answers.freeze()
        self._result = score(self._questions, snapshot, self._bands)
        self._submit_trigger = trigger
        if self._timer is not None:
            self._timer.cancel()
        return self._result

    def _after_submit(self, result: ScoreResult) -> None:
        logger.info(
            "Quiz %s submitted by %s (trigger=%s): %s/%s = %s%%",
            self.quiz_id, self.user_id or 'anonymous', self._submit_trigger,
            result.score, result.max_score, result.percentage,
        )

        if self._gateway is not None:
            record = AttemptRecord(
                quiz_id=self.quiz_id,
                user_id=self.user_id,
                score=result.score,
                max_score=result.max_score,
            )
            self._dispatcher(self._gateway, record)
        else:
            logger.debug("No attempt gateway for quiz=%s, attempt not stored.", self.quiz_id)

        try:
            quiz_submitted.send(
                self,
                quiz_id=self.quiz_id,
                user_id=self.user_id,
                result=result,
                trigger=self._submit_trigger,
            )
        except Exception as exc:
            logger.error("Error emitting quiz_submitted signal: %s", exc, exc_info=True)

    def to_dict(self) -> dict[str, Any]:
        """Learner-facing state. Correct answers only appear inside ``result``."""
        with self._lock:
            current = self.current_question
            answers = {}
            for question in self._questions:
                if question.id in self._answers:
                    value = self._answers.get(question.id)
                    answers[str(question.id)] = sorted(value) if isinstance(value, frozenset) else value
            return {
                'quiz_id': self.quiz_id,
                'state': self.state.value,
                'submitted': self.submitted,
                'current_question_index': self._index,
                'question_count': len(self._questions),
                'current_question': current.to_public_dict() if current is not None else None,
                'answers': answers,
                'remaining_seconds': self.remaining_seconds,
                'result': self._result.to_dict() if self._result is not None else None,
            }
