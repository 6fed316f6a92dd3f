# File: studyhub_app/modules/quiz/engine/answers.py
"""Per-session answer store."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Hashable, Mapping

from .errors import SessionAlreadySubmitted
from .questions import QuestionSet


class AnswerStore:
    """Maps question id to the learner's current answer.

    Values are stored in canonical shape: an ``int`` for single choice, a
    ``frozenset`` for multiple choice and a ``str`` for short answers. The
    store is frozen at submission; later writes raise SessionAlreadySubmitted.
    """

    def __init__(self, questions: QuestionSet):
        self._questions = questions
        self._answers: dict[Hashable, Any] = {}
        self._frozen = False

    def record(self, question_id: Hashable, value: Any) -> Any:
        self._ensure_writable()
        question = self._questions.require(question_id)
        normalized = question.normalize_answer(value)
        self._answers[question_id] = normalized
        return normalized

    def toggle(self, question_id: Hashable, option_index: int) -> frozenset:
        self._ensure_writable()
        question = self._questions.require(question_id)
        index = question.require_option(option_index)
        selected = self._answers.get(question_id, frozenset())
        updated = selected ^ {index}
        self._answers[question_id] = updated
        return updated

    def get(self, question_id: Hashable, default: Any = None) -> Any:
        return self._answers.get(question_id, default)

    def freeze(self) -> Mapping[Hashable, Any]:
        """Stop accepting writes and return a read-only snapshot."""
        self._frozen = True
        return self.snapshot()

    def snapshot(self) -> Mapping[Hashable, Any]:
        return MappingProxyType(dict(self._answers))

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, question_id) -> bool:
        return question_id in self._answers

    def __len__(self) -> int:
        return len(self._answers)

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise SessionAlreadySubmitted()
