# File: studyhub_app/modules/flashcards/forms.py
# Purpose: Forms for decks and cards.

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length

from .config import FlashcardModuleDefaultConfig


class DeckForm(FlaskForm):
    title = StringField('Titel', validators=[DataRequired(message='Bitte gib einen Titel ein.'), Length(max=255)])


class FlashcardForm(FlaskForm):
    """
    Front and back of one card. Both sides are required.
    """
    front = TextAreaField(
        'Vorderseite',
        validators=[
            DataRequired(message='Bitte fülle die Vorderseite aus.'),
            Length(max=FlashcardModuleDefaultConfig.FLASHCARD_MAX_FRONT_LENGTH),
        ],
    )
    back = TextAreaField(
        'Rückseite',
        validators=[
            DataRequired(message='Bitte fülle die Rückseite aus.'),
            Length(max=FlashcardModuleDefaultConfig.FLASHCARD_MAX_BACK_LENGTH),
        ],
    )
