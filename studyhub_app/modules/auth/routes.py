# File: studyhub_app/modules/auth/routes.py
# Purpose: JSON endpoints for registration, login and logout.

from datetime import datetime, timezone

from flask import Blueprint, current_app
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from ...core.error_handlers import error_response, success_response
from ...db_instance import db
from ...utils.forms import json_form, validate_or_raise
from .forms import LoginForm, RegistrationForm
from .services import AuthService

auth_bp = Blueprint('auth', __name__)


@auth_bp.before_app_request
def update_last_seen():
    """Update the user's last_seen timestamp at most every five minutes."""
    if current_user.is_authenticated:
        now = datetime.now(timezone.utc)

        last_seen = current_user.last_seen
        # SQLite hands back naive datetimes
        if last_seen and last_seen.tzinfo is None:
            last_seen = last_seen.replace(tzinfo=timezone.utc)

        if last_seen is None or (now - last_seen).total_seconds() > 300:
            current_user.last_seen = now
            try:
                db.session.commit()
            except Exception as e:
                db.session.rollback()
                current_app.logger.warning(f"Could not update last_seen: {e}")


@auth_bp.route('/api/csrf-token', methods=['GET'])
def api_csrf_token():
    return success_response(data={'csrf_token': generate_csrf()})


@auth_bp.route('/api/register', methods=['POST'])
def api_register():
    form = json_form(RegistrationForm)
    validate_or_raise(form)

    user = AuthService.register_user(form.username.data.strip(), form.email.data.strip(), form.password.data)
    login_user(user)
    return success_response(data=user.to_dict(), message='Registrierung erfolgreich.', status_code=201)


@auth_bp.route('/api/login', methods=['POST'])
def api_login():
    form = json_form(LoginForm)
    validate_or_raise(form)

    user = AuthService.authenticate_user(form.username.data.strip(), form.password.data)
    if user is None:
        current_app.logger.info(f"Failed login for {form.username.data!r}")
        return error_response('Benutzername oder Passwort ist falsch.', 'INVALID_CREDENTIALS', 401)

    login_user(user, remember=form.remember_me.data)
    return success_response(data=user.to_dict(), message='Anmeldung erfolgreich.')


@auth_bp.route('/api/logout', methods=['POST'])
def api_logout():
    logout_user()
    return success_response(message='Abgemeldet.')


@auth_bp.route('/api/me', methods=['GET'])
@login_required
def api_me():
    return success_response(data=current_user.to_dict())
