"""Match blueprint."""

from flask import Blueprint

bp = Blueprint("match", __name__, url_prefix="/api/matches")

from . import routes  # noqa: E402, F401
