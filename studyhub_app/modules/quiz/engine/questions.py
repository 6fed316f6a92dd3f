# File: studyhub_app/modules/quiz/engine/questions.py
"""Immutable question model for a play session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Any, Hashable, Optional, Union

from .errors import ShapeViolation

CorrectAnswer = Union[int, frozenset, None]


class QuestionKind(str, Enum):
    SINGLE_CHOICE = 'single_choice'
    MULTIPLE_CHOICE = 'multiple_choice'
    SHORT_ANSWER = 'short_answer'

    @property
    def is_scorable(self) -> bool:
        return self is not QuestionKind.SHORT_ANSWER

    @property
    def has_options(self) -> bool:
        return self is not QuestionKind.SHORT_ANSWER


def _is_index(value: Any) -> bool:
    # bool is an int subclass, but True is not an option index
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Question:
    """A single quiz question.

    The shape of ``correct_answer`` is tied to ``kind``:

    * ``SINGLE_CHOICE``: one option index
    * ``MULTIPLE_CHOICE``: a frozenset of option indices
    * ``SHORT_ANSWER``: ``None`` (free text is never auto-graded)
    """

    id: Hashable
    kind: QuestionKind
    prompt: str
    options: Optional[tuple] = None
    correct_answer: CorrectAnswer = None
    feedback: str = ''
    order: int = 0

    def __post_init__(self):
        if not isinstance(self.kind, QuestionKind):
            raise ShapeViolation(f"Unknown question kind {self.kind!r}", self.id)

        if self.kind.has_options:
            if not self.options or not all(isinstance(option, str) for option in self.options):
                raise ShapeViolation("Choice questions need a non-empty list of text options", self.id)
        elif self.options is not None:
            raise ShapeViolation("Short answer questions have no options", self.id)

        if self.kind is QuestionKind.SINGLE_CHOICE:
            if not self._in_range(self.correct_answer):
                raise ShapeViolation("Single choice answer must be one valid option index", self.id)
        elif self.kind is QuestionKind.MULTIPLE_CHOICE:
            if not isinstance(self.correct_answer, frozenset) or not all(
                self._in_range(index) for index in self.correct_answer
            ):
                raise ShapeViolation("Multiple choice answer must be a set of valid option indices", self.id)
        elif self.correct_answer is not None:
            raise ShapeViolation("Short answer questions carry no gradable answer", self.id)

    def _in_range(self, index: Any) -> bool:
        return _is_index(index) and 0 <= index < len(self.options or ())

    def normalize_answer(self, value: Any):
        """Return ``value`` in the canonical shape for this kind or raise ShapeViolation."""
        if self.kind is QuestionKind.SINGLE_CHOICE:
            if not self._in_range(value):
                raise ShapeViolation(
                    f"Question {self.id} expects one option index between 0 and {len(self.options) - 1}",
                    self.id,
                )
            return value

        if self.kind is QuestionKind.MULTIPLE_CHOICE:
            if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
                raise ShapeViolation(f"Question {self.id} expects a collection of option indices", self.id)
            try:
                selected = frozenset(value)
            except TypeError:
                raise ShapeViolation(f"Question {self.id} expects a collection of option indices", self.id) from None
            if not all(self._in_range(index) for index in selected):
                raise ShapeViolation(f"Question {self.id} received an invalid option index", self.id)
            return selected

        if not isinstance(value, str):
            raise ShapeViolation(f"Question {self.id} expects a text answer", self.id)
        return value

    def require_option(self, option_index: Any) -> int:
        """Validate a single option index for toggling."""
        if self.kind is not QuestionKind.MULTIPLE_CHOICE:
            raise ShapeViolation(f"Question {self.id} is not a multiple choice question", self.id)
        if not self._in_range(option_index):
            raise ShapeViolation(f"Question {self.id} has no option {option_index!r}", self.id)
        return option_index

    def to_public_dict(self) -> dict[str, Any]:
        """Question payload for learners; never exposes the correct answer."""
        return {
            'id': self.id,
            'type': self.kind.value,
            'question': self.prompt,
            'options': list(self.options) if self.options is not None else None,
            'order': self.order,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Question':
        """Build a question from a stored row (see ``QuizQuestion.to_record``)."""
        raw_kind = record.get('type', record.get('kind'))
        try:
            kind = QuestionKind(raw_kind)
        except ValueError:
            raise ShapeViolation(f"Unknown question kind {raw_kind!r}", record.get('id')) from None

        question_id = record.get('id')
        raw_correct = record.get('correct_answer')
        options = record.get('options')
        if kind.has_options and options is not None and not isinstance(options, (list, tuple)):
            raise ShapeViolation("Options must be a list of text options", question_id)

        correct: CorrectAnswer = None
        if kind is QuestionKind.SINGLE_CHOICE:
            if isinstance(raw_correct, (list, tuple)):
                if not raw_correct:
                    raise ShapeViolation("Single choice question has no correct option", question_id)
                correct = raw_correct[0]
            else:
                correct = raw_correct
        elif kind is QuestionKind.MULTIPLE_CHOICE:
            if _is_index(raw_correct):
                raw_correct = [raw_correct]
            if not isinstance(raw_correct, (list, tuple, set, frozenset)):
                raise ShapeViolation("Multiple choice answer must be a list of option indices", question_id)
            try:
                correct = frozenset(raw_correct)
            except TypeError:
                raise ShapeViolation("Multiple choice answer must be a list of option indices", question_id) from None
        else:
            options = None

        return cls(
            id=question_id,
            kind=kind,
            prompt=record.get('question', record.get('prompt')) or '',
            options=tuple(options) if options is not None else None,
            correct_answer=correct,
            feedback=record.get('feedback') or '',
            order=record.get('order') or 0,
        )


class QuestionSet(Sequence):
    """Read-only, ordered question sequence of one quiz.

    Questions are stable-sorted by ``order``; ids must be unique.
    """

    def __init__(self, questions: Iterable[Question] = ()):
        ordered = tuple(sorted(questions, key=attrgetter('order')))
        by_id: dict[Hashable, Question] = {}
        for question in ordered:
            if question.id in by_id:
                raise ShapeViolation(f"Duplicate question id {question.id!r}", question.id)
            by_id[question.id] = question
        self._questions = ordered
        self._by_id = by_id

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> 'QuestionSet':
        return cls(Question.from_record(record) for record in records)

    def __getitem__(self, index):
        return self._questions[index]

    def __len__(self) -> int:
        return len(self._questions)

    def get(self, question_id: Hashable) -> Optional[Question]:
        return self._by_id.get(question_id)

    def require(self, question_id: Hashable) -> Question:
        question = self._by_id.get(question_id)
        if question is None:
            raise ShapeViolation(f"Unknown question id {question_id!r}", question_id)
        return question

    @property
    def scorable_count(self) -> int:
        return sum(1 for question in self._questions if question.kind.is_scorable)

    def __repr__(self):
        return f"<QuestionSet {len(self)} questions>"
