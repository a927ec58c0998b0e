"""Forms for the tournament blueprint."""

from flask_wtf import FlaskForm
from wtforms import DateField, FloatField, IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from pickabracket.constants import (
    FORMAT_POOL_PLAY,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIM,
    TYPE_DOUBLES,
    TYPE_SINGLES,
)


class ApiForm(FlaskForm):
    """Base form for JSON API bodies; no CSRF token is expected."""

    class Meta:
        csrf = False


class TournamentForm(ApiForm):
    """Form for creating a tournament."""

    name = StringField("Tournament Name", validators=[DataRequired(), Length(max=120)])

    date = DateField("Date", validators=[Optional()])

    location = StringField("Location", validators=[Optional(), Length(max=200)])

    format = SelectField(
        "Tournament Format",
        choices=[
            (FORMAT_SINGLE_ELIM, "Single Elimination"),
            (FORMAT_ROUND_ROBIN, "Round Robin"),
            (FORMAT_POOL_PLAY, "Pool Play"),
        ],
        validators=[Optional()],
        default=FORMAT_SINGLE_ELIM,
    )

    tournament_type = SelectField(
        "Match Type",
        choices=[(TYPE_SINGLES, "Singles"), (TYPE_DOUBLES, "Doubles")],
        validators=[Optional()],
        default=TYPE_SINGLES,
    )


class RegisterPlayerForm(ApiForm):
    """Form for registering a player; either an existing id or a new player."""

    player_id = StringField("Player", validators=[Optional()])
    name = StringField("Name", validators=[Optional(), Length(max=120)])
    email = StringField("Email", validators=[Optional(), Length(max=254)])
    dupr = FloatField("DUPR Rating", validators=[Optional(), NumberRange(min=0, max=8)])
    seed = IntegerField("Seed", validators=[Optional(), NumberRange(min=1)])


class TeamForm(ApiForm):
    """Form for entering a doubles team."""

    team_name = StringField("Team Name", validators=[DataRequired(), Length(max=120)])
    player1_id = StringField("Player 1", validators=[DataRequired()])
    player2_id = StringField("Player 2", validators=[Optional()])
    rating = FloatField("Team Rating", validators=[Optional(), NumberRange(min=0, max=8)])


class CourtForm(ApiForm):
    """Form for creating a court."""

    name = StringField("Court Name", validators=[DataRequired(), Length(max=60)])
    location_notes = StringField(
        "Location Notes", validators=[Optional(), Length(max=200)]
    )
