# File: studyhub_app/modules/flashcards/config.py


class FlashcardModuleDefaultConfig:
    """Default configuration for the flashcards module."""

    # Flask session key holding the current study run
    FLASHCARD_SESSION_KEY = 'flashcard_session'

    FLASHCARD_MAX_FRONT_LENGTH = 2000
    FLASHCARD_MAX_BACK_LENGTH = 5000
