"""Forms for the tournament blueprint."""

from flask_wtf import FlaskForm  # type: ignore
from wtforms import DateField, HiddenField, IntegerField, StringField
from wtforms.validators import DataRequired, NumberRange, Optional, Regexp


class MatchResultForm(FlaskForm):
    """Form for recording the schedule and score of a bracket match."""

    match_date = DateField("Date", validators=[DataRequired()])
    match_time = StringField(
        "Time (UTC)",
        validators=[
            Optional(),
            Regexp(r"^([01]\d|2[0-3]):[0-5]\d$", message="Use the HH:MM format."),
        ],
    )
    player1_score = IntegerField(
        "Player 1 Score",
        validators=[Optional(), NumberRange(min=0, message="Scores cannot be negative.")],
    )
    player2_score = IntegerField(
        "Player 2 Score",
        validators=[Optional(), NumberRange(min=0, message="Scores cannot be negative.")],
    )


class WinnerForm(FlaskForm):
    """Form for designating the winner of a match."""

    player_id = HiddenField("Winner", validators=[DataRequired()])
