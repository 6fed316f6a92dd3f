# File: studyhub_app/modules/auth/forms.py
# Purpose: Login and registration forms.

from flask_wtf import FlaskForm
from wtforms import BooleanField, PasswordField, StringField
from wtforms.validators import DataRequired, EqualTo, Length, Regexp, ValidationError

from ...models import User


class LoginForm(FlaskForm):
    """
    Login form. ``username`` accepts the username or the e-mail address.
    """
    username = StringField('Benutzername', validators=[DataRequired(message='Bitte gib deinen Benutzernamen ein.')])
    password = PasswordField('Passwort', validators=[DataRequired(message='Bitte gib dein Passwort ein.')])
    remember_me = BooleanField('Angemeldet bleiben')


class RegistrationForm(FlaskForm):
    """
    Registration form.
    """
    username = StringField(
        'Benutzername',
        validators=[DataRequired(message='Bitte gib einen Benutzernamen ein.'), Length(min=3, max=80)],
    )
    email = StringField(
        'E-Mail',
        validators=[
            DataRequired(message='Bitte gib deine E-Mail-Adresse ein.'),
            Regexp(r'^[^@\s]+@[^@\s]+\.[^@\s]+$', message='Ungültige E-Mail-Adresse.'),
            Length(max=120),
        ],
    )
    password = PasswordField('Passwort', validators=[DataRequired(message='Bitte gib ein Passwort ein.'), Length(min=6)])
    password2 = PasswordField(
        'Passwort wiederholen',
        validators=[
            DataRequired(message='Bitte bestätige dein Passwort.'),
            EqualTo('password', message='Die Passwörter stimmen nicht überein.'),
        ],
    )

    def validate_username(self, username):
        if User.query.filter_by(username=username.data).first() is not None:
            raise ValidationError('Dieser Benutzername ist bereits vergeben.')

    def validate_email(self, email):
        if User.query.filter_by(email=email.data).first() is not None:
            raise ValidationError('Diese E-Mail-Adresse ist bereits registriert.')
