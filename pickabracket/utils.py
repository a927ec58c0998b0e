"""Utility functions for the application."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import request
from werkzeug.datastructures import ImmutableMultiDict

from .errors import ValidationError

if TYPE_CHECKING:
    from flask_wtf import FlaskForm


def json_body() -> dict[str, Any]:
    """Return the request's JSON object, or an empty dict for an empty body."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body


def json_formdata() -> ImmutableMultiDict:
    """Wrap the JSON body so a FlaskForm can read it.

    Null values are dropped so optional fields see them as missing.
    """
    return ImmutableMultiDict(
        {key: value for key, value in json_body().items() if value is not None}
    )


def validate_form(form: FlaskForm) -> None:
    """Raise ValidationError carrying the first field error of an invalid form."""
    if form.validate():
        return
    for field_name, errors in form.errors.items():
        if not errors:
            continue
        field = getattr(form, field_name, None) if field_name else None
        if field is None:
            raise ValidationError(str(errors[0]))
        raise ValidationError(f"{field.label.text}: {errors[0]}")
    raise ValidationError()
