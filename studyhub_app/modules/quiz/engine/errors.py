# File: studyhub_app/modules/quiz/engine/errors.py
"""Quiz engine error taxonomy."""

from studyhub_app.core.error_handlers import StudyHubError, ValidationError


class ShapeViolation(ValidationError):
    """An answer or question does not match the shape its kind requires.

    Indicates an integration bug (the client sent, or the backend stored,
    a value of the wrong shape). Rejected at the boundary.
    """

    def __init__(self, message: str, question_id=None):
        super().__init__(
            message=message,
            errors={'question_id': question_id} if question_id is not None else None,
            code='SHAPE_VIOLATION',
        )
        self.question_id = question_id


class SessionAlreadySubmitted(StudyHubError):
    """Answers are frozen once the session has been submitted."""

    def __init__(self, message: str = 'Quiz already submitted'):
        super().__init__(message=message, code='ALREADY_SUBMITTED', status_code=409)


class PersistenceFailure(StudyHubError):
    """The attempt could not be stored. Logged by the dispatcher, never surfaced."""

    def __init__(self, message: str = 'Could not store quiz attempt', details=None):
        super().__init__(message=message, code='PERSISTENCE_FAILURE', status_code=500, details=details)
