"""Database models package for StudyHub."""

from ..db_instance import db

from .user import User
from .summary import SummaryModule, SummaryPdf, SummarySection
from .flashcard import Deck, Flashcard
from .quiz import Quiz, QuizAttempt, QuizQuestion

__all__ = [
    'db',
    'User',
    'SummaryModule',
    'SummarySection',
    'SummaryPdf',
    'Deck',
    'Flashcard',
    'Quiz',
    'QuizQuestion',
    'QuizAttempt',
]
