# File: studyhub_app/modules/quiz/routes/quiz_api.py
# Purpose: JSON endpoints for the quiz overview, quiz editor and attempt history.

from flask import current_app, request
from flask_login import current_user, login_required

from ....core.error_handlers import success_response
from ....utils.forms import json_form, validate_or_raise
from ..config import get_quiz_setting
from ..forms import QuizForm
from ..services.quiz_service import QuizService
from . import quiz_bp


@quiz_bp.route('/api/quizzes', methods=['GET'])
def list_quizzes():
    """All quizzes, newest first, with the current learner's status."""
    return success_response(data=QuizService.list_quizzes(current_user))


@quiz_bp.route('/api/quizzes', methods=['POST'])
@login_required
def create_quiz():
    form = json_form(QuizForm)
    validate_or_raise(form)

    quiz = QuizService.create_quiz(
        current_user,
        title=form.title.data.strip(),
        description=form.description.data,
        module_id=form.module_id.data,
        difficulty=form.difficulty.data,
        time_limit_seconds=form.time_limit_seconds(get_quiz_setting('QUIZ_DEFAULT_TIME_LIMIT_MINUTES')),
    )
    return success_response(data=QuizService.quiz_detail(quiz, current_user), message='Quiz erstellt.', status_code=201)


@quiz_bp.route('/api/quizzes/<int:quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    quiz = QuizService.get_quiz_or_404(quiz_id)
    return success_response(data=QuizService.quiz_detail(quiz, current_user))


@quiz_bp.route('/api/quizzes/<int:quiz_id>/questions', methods=['PUT'])
@login_required
def save_questions(quiz_id):
    """Replace the editor state: upsert every question, order by list position."""
    quiz = QuizService.get_quiz_or_404(quiz_id)
    QuizService.require_owner(quiz, current_user)

    data = request.get_json(silent=True) or {}
    payload = data.get('questions') if isinstance(data, dict) else data
    rows = QuizService.save_questions(quiz, payload)
    return success_response(data=[row.to_record() for row in rows], message='Quiz gespeichert.')


@quiz_bp.route('/api/quizzes/<int:quiz_id>/questions', methods=['POST'])
@login_required
def add_question(quiz_id):
    quiz = QuizService.get_quiz_or_404(quiz_id)
    QuizService.require_owner(quiz, current_user)
    row = QuizService.add_question(quiz)
    return success_response(data=row.to_record(), status_code=201)


@quiz_bp.route('/api/questions/<int:question_id>', methods=['DELETE'])
@login_required
def delete_question(question_id):
    QuizService.delete_question(question_id, current_user)
    return success_response(message='Frage gelöscht.')


@quiz_bp.route('/api/quizzes/<int:quiz_id>/attempts', methods=['GET'])
@login_required
def list_attempts(quiz_id):
    quiz = QuizService.get_quiz_or_404(quiz_id)
    attempts = QuizService.attempts_for_user(quiz, current_user)
    current_app.logger.debug(f"{len(attempts)} attempts of quiz {quiz_id} for user {current_user.user_id}")
    return success_response(data=attempts)
