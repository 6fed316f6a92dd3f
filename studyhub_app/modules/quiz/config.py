# File: studyhub_app/modules/quiz/config.py

from flask import current_app, has_app_context


class QuizModuleDefaultConfig:
    """
    Default configuration for the quiz module.

    Any key can be overridden through ``app.config`` under the same name.
    """

    # Feedback bands, evaluated highest threshold first. The last threshold
    # must be 0 so every percentage lands in a band.
    FEEDBACK_BANDS = (
        (90, 'mastered'),
        (70, 'good'),
        (50, 'adequate'),
        (0, 'needs_practice'),
    )

    FEEDBACK_MESSAGES = {
        'mastered': 'Hervorragend! Du hast das Thema gemeistert.',
        'good': 'Gute Leistung, weiter so!',
        'adequate': 'Solide Grundlage – jetzt vertiefen.',
        'needs_practice': 'Noch etwas Übung nötig. Bleib dran!',
    }

    # Quiz overview status: an attempt at or above this ratio marks a quiz as mastered
    QUIZ_MASTERY_RATIO = 0.8

    # Play sessions
    QUIZ_TIMER_TICK_SECONDS = 1.0
    QUIZ_SESSION_IDLE_TIMEOUT_SECONDS = 3 * 60 * 60
    QUIZ_SESSION_PRUNE_INTERVAL_SECONDS = 300
    QUIZ_PERSIST_IN_BACKGROUND = True
    QUIZ_PERSIST_ANONYMOUS_ATTEMPTS = False

    # Quiz creation defaults
    QUIZ_DEFAULT_QUESTION_COUNT = 3
    QUIZ_DEFAULT_OPTIONS = ['Option A', 'Option B', 'Option C', 'Option D']
    QUIZ_DEFAULT_FEEDBACK = 'Hier steht die Erklärung zur richtigen Antwort.'
    QUIZ_NEW_QUESTION_OPTIONS = ['Option A', 'Option B']
    QUIZ_DEFAULT_TIME_LIMIT_MINUTES = 10


def get_quiz_setting(key: str):
    """Read a quiz setting from the current app config with module fallback."""
    default = getattr(QuizModuleDefaultConfig, key)
    if not has_app_context():
        return default
    return current_app.config.get(key, default)
