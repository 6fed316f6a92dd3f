"""HTTP routes for the quiz module."""

from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__)

from . import play_api, quiz_api  # noqa: E402,F401
