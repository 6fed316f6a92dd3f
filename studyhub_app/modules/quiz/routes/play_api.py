# File: studyhub_app/modules/quiz/routes/play_api.py
# Purpose: JSON endpoints driving one learner's play session.
#
# The browser session only stores a play token; the QuizSession itself is
# held by the app's QuizSessionRegistry.

from flask import current_app, request, session
from flask_login import current_user

from ....core.error_handlers import NotFoundError, success_response
from ..services.quiz_service import QuizService
from . import quiz_bp

PLAY_TOKEN_KEY = 'quiz_play_token'


def _registry():
    return current_app.extensions['quiz_sessions']


def _current_play():
    play = _registry().get(session.get(PLAY_TOKEN_KEY))
    if play is None:
        raise NotFoundError('No active quiz session', resource='quiz_session')
    return play


def _payload():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@quiz_bp.route('/api/quizzes/<int:quiz_id>/play', methods=['POST'])
def start_play(quiz_id):
    """Start a play session; a previous session of this browser is abandoned."""
    quiz = QuizService.get_quiz_or_404(quiz_id)
    play = QuizService.build_session(quiz, current_user)
    token = _registry().start(play, replaces=session.get(PLAY_TOKEN_KEY))
    session[PLAY_TOKEN_KEY] = token
    current_app.logger.info(f"Play session started for quiz {quiz_id} ({len(play.questions)} questions)")
    return success_response(data=play.to_dict(), status_code=201)


@quiz_bp.route('/api/play', methods=['GET'])
def get_play():
    return success_response(data=_current_play().to_dict())


@quiz_bp.route('/api/play', methods=['DELETE'])
def abandon_play():
    _registry().abandon(session.pop(PLAY_TOKEN_KEY, None))
    return success_response(message='Quiz abgebrochen.')


@quiz_bp.route('/api/play/answer', methods=['POST'])
def record_answer():
    play = _current_play()
    data = _payload()
    play.record_answer(data.get('question_id'), data.get('value'))
    return success_response(data=play.to_dict())


@quiz_bp.route('/api/play/toggle', methods=['POST'])
def toggle_option():
    play = _current_play()
    data = _payload()
    play.toggle_multiple_choice_option(data.get('question_id'), data.get('option_index'))
    return success_response(data=play.to_dict())


@quiz_bp.route('/api/play/next', methods=['POST'])
def next_question():
    play = _current_play()
    play.go_to_next()
    return success_response(data=play.to_dict())


@quiz_bp.route('/api/play/previous', methods=['POST'])
def previous_question():
    play = _current_play()
    play.go_to_previous()
    return success_response(data=play.to_dict())


@quiz_bp.route('/api/play/submit', methods=['POST'])
def submit_play():
    """Submit the session. Repeated calls return the stored result."""
    play = _current_play()
    play.submit()
    return success_response(data=play.to_dict())
