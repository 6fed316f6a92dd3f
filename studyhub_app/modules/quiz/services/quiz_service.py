"""
Quiz Service - quiz authoring, overview and play session assembly.

Keeps DB logic out of the routes. Every question that is written goes
through the engine's ``Question`` model first, so stored rows always have
a valid shape for their kind.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from flask import current_app

from studyhub_app.core.error_handlers import AuthorizationError, NotFoundError, ValidationError
from studyhub_app.core.signals import content_created
from studyhub_app.models import Quiz, QuizAttempt, QuizQuestion, SummaryModule, db

from ..config import get_quiz_setting
from ..engine import (
    Question,
    QuestionKind,
    QuestionSet,
    QuizSession,
    dispatch_in_background,
    dispatch_inline,
)
from .attempt_gateway import SqlAttemptGateway

STATUS_OPEN = 'offen'
STATUS_MASTERED = 'beherrscht'
STATUS_REVIEW = 'wiederholen'


def _to_storage(question: Question) -> dict[str, Any]:
    """Column values for a validated question (choice answers stored as index lists)."""
    if question.kind is QuestionKind.SINGLE_CHOICE:
        correct = [question.correct_answer]
    elif question.kind is QuestionKind.MULTIPLE_CHOICE:
        correct = sorted(question.correct_answer)
    else:
        correct = None
    return {
        'question_type': question.kind.value,
        'question': question.prompt,
        'options': list(question.options) if question.options is not None else None,
        'correct_answer': correct,
        'feedback': question.feedback,
        'order': question.order,
    }


class QuizService:
    """Service for quiz related operations."""

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    @staticmethod
    def get_quiz_or_404(quiz_id: int) -> Quiz:
        quiz = db.session.get(Quiz, quiz_id)
        if quiz is None:
            raise NotFoundError('Quiz not found', resource='quiz')
        return quiz

    @staticmethod
    def require_owner(quiz: Quiz, user) -> None:
        if user is None or not getattr(user, 'is_authenticated', False) or quiz.user_id != user.user_id:
            raise AuthorizationError('Only the quiz owner can edit this quiz')

    @staticmethod
    def load_question_set(quiz: Quiz) -> QuestionSet:
        return QuestionSet.from_records(question.to_record() for question in quiz.questions)

    # ------------------------------------------------------------------
    # Overview
    # ------------------------------------------------------------------
    @staticmethod
    def status_for(attempts: Iterable[QuizAttempt]) -> str:
        """``offen`` without attempts, ``beherrscht`` once any attempt reaches the mastery ratio."""
        ratio_needed = get_quiz_setting('QUIZ_MASTERY_RATIO')
        seen_any = False
        for attempt in attempts:
            seen_any = True
            ratio = attempt.score / attempt.max_score if attempt.max_score else 1.0
            if ratio >= ratio_needed:
                return STATUS_MASTERED
        return STATUS_REVIEW if seen_any else STATUS_OPEN

    @staticmethod
    def list_quizzes(user=None) -> list[dict[str, Any]]:
        quizzes = Quiz.query.order_by(Quiz.created_at.desc(), Quiz.quiz_id.desc()).all()

        attempts_by_quiz: dict[int, list[QuizAttempt]] = {}
        if user is not None and getattr(user, 'is_authenticated', False):
            for attempt in QuizAttempt.query.filter_by(user_id=user.user_id).all():
                attempts_by_quiz.setdefault(attempt.quiz_id, []).append(attempt)

        result = []
        for quiz in quizzes:
            payload = quiz.to_dict()
            payload['question_count'] = len(quiz.questions)
            payload['status'] = QuizService.status_for(attempts_by_quiz.get(quiz.quiz_id, ()))
            result.append(payload)
        return result

    @staticmethod
    def quiz_detail(quiz: Quiz, user=None) -> dict[str, Any]:
        payload = quiz.to_dict()
        payload['questions'] = [question.to_record() for question in quiz.questions]
        payload['is_owner'] = bool(
            user is not None and getattr(user, 'is_authenticated', False) and quiz.user_id == user.user_id
        )
        return payload

    @staticmethod
    def attempts_for_user(quiz: Quiz, user) -> list[dict[str, Any]]:
        attempts = (
            quiz.attempts.filter_by(user_id=user.user_id)
            .order_by(QuizAttempt.created_at.desc(), QuizAttempt.attempt_id.desc())
            .all()
        )
        return [attempt.to_dict() for attempt in attempts]

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------
    @staticmethod
    def create_quiz(
        user,
        title: str,
        description: Optional[str] = None,
        module_id: Optional[int] = None,
        difficulty: Optional[str] = None,
        time_limit_seconds: Optional[int] = None,
    ) -> Quiz:
        """Create a quiz and seed it with placeholder multiple choice questions."""
        if module_id and db.session.get(SummaryModule, module_id) is None:
            raise ValidationError('Unknown summary module', errors={'module_id': module_id})

        quiz = Quiz(
            user_id=user.user_id,
            title=title,
            description=description or None,
            module_id=module_id or None,
            difficulty=difficulty or Quiz.DIFFICULTIES[0],
            time_limit_seconds=time_limit_seconds or None,
        )
        db.session.add(quiz)
        db.session.flush()

        options = list(get_quiz_setting('QUIZ_DEFAULT_OPTIONS'))
        feedback = get_quiz_setting('QUIZ_DEFAULT_FEEDBACK')
        for position in range(get_quiz_setting('QUIZ_DEFAULT_QUESTION_COUNT')):
            db.session.add(QuizQuestion(
                quiz_id=quiz.quiz_id,
                question_type=QuestionKind.MULTIPLE_CHOICE.value,
                question=f'Frage {position + 1}',
                options=list(options),
                correct_answer=[0],
                feedback=feedback,
                order=position,
            ))
        db.session.commit()

        current_app.logger.info(f"Quiz created: {quiz.title} ({quiz.quiz_id}) by user {user.user_id}")
        try:
            content_created.send(
                current_app._get_current_object(),
                user_id=user.user_id,
                content_type='quiz',
                content_id=quiz.quiz_id,
                title=quiz.title,
            )
        except Exception as e:
            current_app.logger.error(f"Error emitting content_created signal: {e}")
        return quiz

    @staticmethod
    def save_questions(quiz: Quiz, payload: list[dict[str, Any]]) -> list[QuizQuestion]:
        """Upsert ``payload`` as the quiz's question list; ``order`` follows list position.

        Validation runs over the whole list before anything is written.
        """
        if not isinstance(payload, list):
            raise ValidationError('Expected a list of questions')

        existing = {question.question_id: question for question in quiz.questions}
        validated: list[tuple[Optional[QuizQuestion], Question]] = []
        for position, raw in enumerate(payload):
            if not isinstance(raw, dict):
                raise ValidationError('Each question must be an object', errors={'position': position})
            raw_id = raw.get('id')
            row = None
            if raw_id is not None:
                row = existing.get(raw_id)
                if row is None:
                    raise ValidationError(
                        f'Question {raw_id!r} does not belong to this quiz', errors={'question_id': raw_id}
                    )
            record = dict(raw, id=raw_id if raw_id is not None else f'new-{position}', order=position)
            validated.append((row, Question.from_record(record)))
        # A repeated id would write the same row twice.
        QuestionSet(question for _, question in validated)

        rows = []
        for row, question in validated:
            values = _to_storage(question)
            if row is None:
                row = QuizQuestion(quiz_id=quiz.quiz_id, **values)
                db.session.add(row)
            else:
                for column, value in values.items():
                    setattr(row, column, value)
            rows.append(row)
        db.session.commit()

        current_app.logger.info(f"Saved {len(rows)} questions for quiz {quiz.quiz_id}")
        return rows

    @staticmethod
    def add_question(quiz: Quiz) -> QuizQuestion:
        """Append a new multiple choice question with editor defaults."""
        next_order = max((question.order for question in quiz.questions), default=-1) + 1
        row = QuizQuestion(
            quiz_id=quiz.quiz_id,
            question_type=QuestionKind.MULTIPLE_CHOICE.value,
            question='',
            options=list(get_quiz_setting('QUIZ_NEW_QUESTION_OPTIONS')),
            correct_answer=[0],
            feedback='',
            order=next_order,
        )
        db.session.add(row)
        db.session.commit()
        return row

    @staticmethod
    def delete_question(question_id: int, user) -> int:
        row = db.session.get(QuizQuestion, question_id)
        if row is None:
            raise NotFoundError('Question not found', resource='quiz_question')
        QuizService.require_owner(row.quiz, user)
        quiz_id = row.quiz_id
        db.session.delete(row)
        db.session.commit()
        current_app.logger.info(f"Deleted question {question_id} from quiz {quiz_id}")
        return quiz_id

    # ------------------------------------------------------------------
    # Play
    # ------------------------------------------------------------------
    @staticmethod
    def build_session(quiz: Quiz, user=None) -> QuizSession:
        """Assemble a play session with the settings of the current app.

        The timer thread runs without an app context, so bands and the
        persistence strategy are captured here.
        """
        app = current_app._get_current_object()
        user_id = user.user_id if user is not None and getattr(user, 'is_authenticated', False) else None

        gateway = None
        if user_id is not None or get_quiz_setting('QUIZ_PERSIST_ANONYMOUS_ATTEMPTS'):
            gateway = SqlAttemptGateway(app)

        dispatcher = dispatch_in_background if get_quiz_setting('QUIZ_PERSIST_IN_BACKGROUND') else dispatch_inline

        return QuizSession(
            QuizService.load_question_set(quiz),
            quiz_id=quiz.quiz_id,
            user_id=user_id,
            time_limit_seconds=quiz.time_limit_seconds,
            attempt_gateway=gateway,
            dispatcher=dispatcher,
            bands=get_quiz_setting('FEEDBACK_BANDS'),
            tick_interval=get_quiz_setting('QUIZ_TIMER_TICK_SECONDS'),
        )
