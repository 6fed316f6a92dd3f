"""Quiz, question and attempt models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..db_instance import db


class Quiz(db.Model):
    """A quiz owned by a user, optionally linked to a summary module."""

    __tablename__ = 'quizzes'

    DIFFICULTIES = ('Grundlagen', 'Vertiefung', 'Prüfungsvorbereitung')

    quiz_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=False)
    module_id = db.Column(db.Integer, db.ForeignKey('summary_modules.module_id', ondelete='SET NULL'), nullable=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    difficulty = db.Column(db.String(40), nullable=False, default=DIFFICULTIES[0])
    time_limit_seconds = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    owner = db.relationship('User', backref='quizzes', lazy=True)
    module = db.relationship('SummaryModule', backref='quizzes', lazy=True)
    questions = db.relationship(
        'QuizQuestion',
        backref='quiz',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='QuizQuestion.order',
    )
    attempts = db.relationship(
        'QuizAttempt',
        backref='quiz',
        lazy='dynamic',
        cascade='all, delete-orphan',
    )

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.quiz_id,
            'user_id': self.user_id,
            'module_id': self.module_id,
            'title': self.title,
            'description': self.description,
            'difficulty': self.difficulty,
            'time_limit_seconds': self.time_limit_seconds,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class QuizQuestion(db.Model):
    """A stored question row.

    ``correct_answer`` is a JSON list of option indices for both choice kinds
    (single choice uses the first element) and ``""``/``None`` for short answers.
    """

    __tablename__ = 'quiz_questions'

    question_id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey('quizzes.quiz_id'), nullable=False, index=True)
    question_type = db.Column(db.String(30), nullable=False)
    question = db.Column(db.Text, nullable=False, default='')
    options = db.Column(JSON, nullable=True)
    correct_answer = db.Column(JSON, nullable=True)
    feedback = db.Column(db.Text, nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)

    def to_record(self) -> dict[str, object]:
        return {
            'id': self.question_id,
            'quiz_id': self.quiz_id,
            'type': self.question_type,
            'question': self.question,
            'options': list(self.options) if self.options is not None else None,
            'correct_answer': self.correct_answer,
            'feedback': self.feedback or '',
            'order': self.order,
        }


class QuizAttempt(db.Model):
    """A completed quiz attempt. Rows are insert-only."""

    __tablename__ = 'quiz_attempts'

    STATUS_COMPLETED = 'completed'

    attempt_id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey('quizzes.quiz_id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=True, index=True)
    score = db.Column(db.Integer, nullable=False)
    max_score = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_COMPLETED)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.attempt_id,
            'quiz_id': self.quiz_id,
            'user_id': self.user_id,
            'score': self.score,
            'max_score': self.max_score,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
