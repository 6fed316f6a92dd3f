"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from flask import Flask

from ..extensions import csrf_protect, db, login_manager, scheduler
from .error_handlers import error_response, register_error_handlers
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure the package logger and attach it to the Flask app logger."""

    setup_logging(
        app,
        log_level=app.config.get('LOG_LEVEL', 'INFO'),
        log_dir=app.config.get('LOG_DIR'),
        json_format=app.config.get('LOG_JSON_FORMAT', False),
    )


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)
    csrf_protect.init_app(app)

    from ..modules.quiz.config import QuizModuleDefaultConfig
    from ..modules.quiz.services.session_registry import QuizSessionRegistry

    app.extensions['quiz_sessions'] = QuizSessionRegistry(
        max_idle_seconds=app.config.get(
            'QUIZ_SESSION_IDLE_TIMEOUT_SECONDS',
            QuizModuleDefaultConfig.QUIZ_SESSION_IDLE_TIMEOUT_SECONDS,
        )
    )


def configure_scheduler(app: Flask) -> None:
    """Start the background scheduler and register periodic jobs."""

    if not app.config.get('SCHEDULER_ENABLED', True) or app.testing:
        app.logger.info("Scheduler disabled, skipping background jobs.")
        return

    from apscheduler.schedulers import SchedulerAlreadyRunningError

    from ..modules.quiz.services.session_registry import prune_abandoned_sessions

    try:
        scheduler.init_app(app)
        if not scheduler.running:
            scheduler.start()
        interval = app.config.get('QUIZ_SESSION_PRUNE_INTERVAL_SECONDS', 300)
        if not scheduler.get_job('prune_quiz_sessions'):
            scheduler.add_job(
                id='prune_quiz_sessions',
                func=prune_abandoned_sessions,
                trigger='interval',
                seconds=interval,
                replace_existing=True,
            )
            app.logger.info("Registered job prune_quiz_sessions (every %ss).", interval)
    except SchedulerAlreadyRunningError:
        app.logger.info("Scheduler already running, skipping re-initialisation.")


def register_identity_hooks(app: Flask) -> None:
    """Wire Flask-Login to the User model and answer JSON for anonymous access."""

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return error_response('Login required', 'UNAUTHORIZED', 401)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)
    register_error_handlers(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401  (registers the mappers)

    db.create_all()
    app.logger.info("Database tables ensured at %s", app.config.get('SQLALCHEMY_DATABASE_URI'))
