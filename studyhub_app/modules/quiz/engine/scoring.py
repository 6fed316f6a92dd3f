# File: studyhub_app/modules/quiz/engine/scoring.py
"""Pure scoring of a submitted answer snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Mapping, Optional, Sequence

from ..config import QuizModuleDefaultConfig
from .questions import Question, QuestionKind


class FeedbackBand(str, Enum):
    MASTERED = 'mastered'
    GOOD = 'good'
    ADEQUATE = 'adequate'
    NEEDS_PRACTICE = 'needs_practice'


class Outcome(str, Enum):
    CORRECT = 'correct'
    INCORRECT = 'incorrect'
    NEUTRAL = 'neutral'


BandTable = Sequence[tuple]


def feedback_band_for(percentage: int, bands: Optional[BandTable] = None) -> FeedbackBand:
    """Map a percentage to its band, checking the highest threshold first."""
    table = sorted(bands or QuizModuleDefaultConfig.FEEDBACK_BANDS, key=lambda row: row[0], reverse=True)
    for threshold, band in table:
        if percentage >= threshold:
            return FeedbackBand(band)
    return FeedbackBand(table[-1][1])


def percentage_of(score: int, max_score: int) -> int:
    """Whole-number percentage, rounding halves up; 100 when nothing is scorable."""
    if max_score == 0:
        return 100
    return (200 * score + max_score) // (2 * max_score)


def is_answer_correct(question: Question, answer: Any) -> bool:
    if question.kind is QuestionKind.SINGLE_CHOICE:
        return answer is not None and answer == question.correct_answer
    if question.kind is QuestionKind.MULTIPLE_CHOICE:
        return frozenset(answer or ()) == question.correct_answer
    return False


def _jsonable(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return value


@dataclass(frozen=True)
class QuestionReview:
    """Post-submission detail for one question."""

    question: Question
    outcome: Outcome
    learner_answer: Any = None

    def to_dict(self) -> dict[str, Any]:
        question = self.question
        return {
            'question_id': question.id,
            'type': question.kind.value,
            'question': question.prompt,
            'options': list(question.options) if question.options is not None else None,
            'outcome': self.outcome.value,
            'learner_answer': _jsonable(self.learner_answer),
            'correct_answer': _jsonable(question.correct_answer),
            'feedback': question.feedback,
        }


@dataclass(frozen=True)
class ScoreResult:
    score: int
    max_score: int
    percentage: int
    band: FeedbackBand
    reviews: tuple = ()

    @property
    def message(self) -> str:
        return QuizModuleDefaultConfig.FEEDBACK_MESSAGES.get(self.band.value, '')

    def to_dict(self) -> dict[str, Any]:
        return {
            'score': self.score,
            'max_score': self.max_score,
            'percentage': self.percentage,
            'band': self.band.value,
            'message': self.message,
            'reviews': [review.to_dict() for review in self.reviews],
        }


def score(
    questions: Sequence[Question],
    answers: Mapping[Hashable, Any],
    bands: Optional[BandTable] = None,
) -> ScoreResult:
    """Score ``answers`` against ``questions``.

    Short answer questions never count towards the score and are reviewed
    as neutral.
    """
    correct_count = 0
    scorable_count = 0
    reviews = []

    for question in questions:
        answer = answers.get(question.id)
        if not question.kind.is_scorable:
            reviews.append(QuestionReview(question, Outcome.NEUTRAL, answer))
            continue

        scorable_count += 1
        if is_answer_correct(question, answer):
            correct_count += 1
            reviews.append(QuestionReview(question, Outcome.CORRECT, answer))
        else:
            reviews.append(QuestionReview(question, Outcome.INCORRECT, answer))

    percentage = percentage_of(correct_count, scorable_count)
    return ScoreResult(
        score=correct_count,
        max_score=scorable_count,
        percentage=percentage,
        band=feedback_band_for(percentage, bands),
        reviews=tuple(reviews),
    )
