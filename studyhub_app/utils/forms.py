# File: studyhub_app/utils/forms.py
# Purpose: Bind Flask-WTF forms to JSON request bodies.

from flask import request
from werkzeug.datastructures import MultiDict

from ..core.error_handlers import ValidationError


def json_form(form_class, **kwargs):
    """Build ``form_class`` from the JSON body; ``null`` values count as missing."""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        raise ValidationError('Expected a JSON object')
    formdata = MultiDict({key: value for key, value in payload.items() if value is not None})
    return form_class(formdata=formdata, **kwargs)


def validate_or_raise(form) -> None:
    """Run form validation and turn field errors into a ValidationError."""
    if not form.validate():
        raise ValidationError('Invalid input', errors=form.errors)
