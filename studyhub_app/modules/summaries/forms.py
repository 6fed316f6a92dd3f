# File: studyhub_app/modules/summaries/forms.py
# Purpose: Forms for summary modules and their sections.

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional


class SummaryModuleForm(FlaskForm):
    title = StringField('Titel', validators=[DataRequired(message='Bitte gib einen Titel ein.'), Length(max=255)])
    description = TextAreaField('Beschreibung', validators=[Optional()])


class SectionContentForm(FlaskForm):
    """Content is rich text from the editor; an empty string clears the section."""
    content = TextAreaField('Inhalt', validators=[Optional()])
