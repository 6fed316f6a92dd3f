"""Quiz play engine: question model, answers, scoring, timer and session."""

from .answers import AnswerStore
from .attempts import AttemptGateway, AttemptRecord, dispatch_in_background, dispatch_inline
from .errors import PersistenceFailure, SessionAlreadySubmitted, ShapeViolation
from .questions import Question, QuestionKind, QuestionSet
from .scoring import FeedbackBand, Outcome, QuestionReview, ScoreResult, feedback_band_for, score
from .session import QuizSession, SessionState
from .timer import SessionTimer

__all__ = [
    'AnswerStore',
    'AttemptGateway',
    'AttemptRecord',
    'dispatch_in_background',
    'dispatch_inline',
    'PersistenceFailure',
    'SessionAlreadySubmitted',
    'ShapeViolation',
    'Question',
    'QuestionKind',
    'QuestionSet',
    'FeedbackBand',
    'Outcome',
    'QuestionReview',
    'ScoreResult',
    'feedback_band_for',
    'score',
    'QuizSession',
    'SessionState',
    'SessionTimer',
]
