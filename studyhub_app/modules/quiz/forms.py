# File: studyhub_app/modules/quiz/forms.py
# Purpose: Input forms for creating quizzes.

from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from ...models import Quiz


class QuizForm(FlaskForm):
    """
    Form for creating a quiz.
    ``time_limit_minutes`` is only used when ``is_timed`` is set.
    """
    title = StringField('Titel', validators=[DataRequired(message='Bitte gib einen Titel ein.'), Length(max=255)])
    description = TextAreaField('Beschreibung', validators=[Optional()])
    module_id = IntegerField('Modul', validators=[Optional()])
    difficulty = SelectField(
        'Schwierigkeit',
        choices=[(value, value) for value in Quiz.DIFFICULTIES],
        default=Quiz.DIFFICULTIES[0],
    )
    is_timed = BooleanField('Mit Zeitlimit')
    time_limit_minutes = IntegerField(
        'Zeitlimit (Minuten)',
        validators=[Optional(), NumberRange(min=1, max=600, message='Zeitlimit zwischen 1 und 600 Minuten.')],
    )

    def time_limit_seconds(self, default_minutes: int):
        if not self.is_timed.data:
            return None
        return (self.time_limit_minutes.data or default_minutes) * 60
