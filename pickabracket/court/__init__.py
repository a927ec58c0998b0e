"""Court blueprint."""

from flask import Blueprint

bp = Blueprint("court", __name__, url_prefix="/api/courts")

from . import routes  # noqa: E402, F401
