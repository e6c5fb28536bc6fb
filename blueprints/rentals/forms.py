"""
Rental forms using Flask-WTF.
Validate JSON or form payloads for reservation creation and settings updates.

The JSON API is protected by CSRFProtect at request level (X-CSRFToken
header), so the forms are built with the per-form CSRF field disabled.
"""

from flask_wtf import FlaskForm
from wtforms import BooleanField, IntegerField, SelectField, StringField
from wtforms.validators import (
    DataRequired, InputRequired, Length, NumberRange, Optional, Regexp
)

from utils.validators import MAX_PEOPLE, MIN_NAME_LENGTH, TIME_PATTERN


DATE_REGEX = r'^\d{4}-\d{2}-\d{2}$'

TIMESLOT_CHOICES = [
    ('morning', 'Morning'),
    ('afternoon', 'Afternoon'),
    ('full_day', 'Full day'),
]


class ReservationForm(FlaskForm):
    """New reservation."""

    class Meta:
        csrf = False

    name = StringField('Name', validators=[
        DataRequired(message='Name is required'),
        Length(min=MIN_NAME_LENGTH, max=100,
               message=f'Name must be at least {MIN_NAME_LENGTH} characters')
    ])

    date = StringField('Date', validators=[
        DataRequired(message='Date is required'),
        Regexp(DATE_REGEX, message='Invalid date. Use YYYY-MM-DD')
    ])

    arrival_time = StringField('Arrival time', validators=[
        DataRequired(message='Arrival time is required'),
        Regexp(TIME_PATTERN, message='Invalid time format. Use HH:MM')
    ])

    nb_people = IntegerField('People', validators=[
        InputRequired(message='Number of people is required'),
        NumberRange(min=1, max=MAX_PEOPLE,
                    message=f'Number of people must be between 1 and {MAX_PEOPLE}')
    ])

    single_canoes = IntegerField('Single canoes', default=0, validators=[
        Optional(),
        NumberRange(min=0, message='Canoe counts cannot be negative')
    ])

    double_canoes = IntegerField('Double canoes', default=0, validators=[
        Optional(),
        NumberRange(min=0, message='Canoe counts cannot be negative')
    ])

    timeslot = SelectField('Time slot', choices=TIMESLOT_CHOICES, validators=[
        DataRequired(message='Time slot is required')
    ])

    def to_fields(self) -> dict:
        """Cleaned values keyed like create_reservation() arguments."""
        return {
            'name': self.name.data.strip(),
            'date': self.date.data,
            'arrival_time': self.arrival_time.data,
            'nb_people': self.nb_people.data,
            'single_canoes': self.single_canoes.data or 0,
            'double_canoes': self.double_canoes.data or 0,
            'timeslot': self.timeslot.data,
        }


class SettingsForm(FlaskForm):
    """Inventory and schedule settings. Every field is optional (partial update)."""

    class Meta:
        csrf = False

    total_single_canoes = IntegerField('Single canoes', validators=[
        Optional(),
        NumberRange(min=0, message='Canoe counts cannot be negative')
    ])

    total_double_canoes = IntegerField('Double canoes', validators=[
        Optional(),
        NumberRange(min=0, message='Canoe counts cannot be negative')
    ])

    morning_start = StringField('Morning start', validators=[
        Optional(), Regexp(TIME_PATTERN, message='Invalid time format. Use HH:MM')
    ])

    morning_end = StringField('Morning end', validators=[
        Optional(), Regexp(TIME_PATTERN, message='Invalid time format. Use HH:MM')
    ])

    afternoon_start = StringField('Afternoon start', validators=[
        Optional(), Regexp(TIME_PATTERN, message='Invalid time format. Use HH:MM')
    ])

    afternoon_end = StringField('Afternoon end', validators=[
        Optional(), Regexp(TIME_PATTERN, message='Invalid time format. Use HH:MM')
    ])

    auto_backup_enabled = BooleanField('Automatic backup')

    def to_fields(self, submitted: dict) -> dict:
        """Values of the fields actually present in the submitted payload."""
        return {
            name: self[name].data
            for name in submitted
            if name in self._fields and self[name].data is not None
        }


def first_error(form: FlaskForm) -> str:
    """First validation message of a form, for single-line API errors."""
    for messages in form.errors.values():
        if messages:
            return messages[0]
    return 'Invalid data'
