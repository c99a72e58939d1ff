import pytest

from app.models.visa_type import DurationUnit, VisaDuration
from app.services.duration_parser import parse_duration, parse_duration_days


@pytest.mark.parametrize("text, expected", [
    ("30", 30),
    ("  45  ", 45),
    ("30 days", 30),
    ("1 day", 1),
    ("6 months", 180),
    ("1 Month", 30),
    ("1 year", 365),
    ("2 YEARS", 730),
    ("valid for 90 days", 90),
])
def test_parse_duration_days(text, expected):
    assert parse_duration_days(text) == expected


@pytest.mark.parametrize("text", [
    None, "", "   ", "0", "-5", "0 days", "days", "forever", "multiple entry", "4_5", "+30", "\u0663\u0660",
])
def test_undetermined_durations_are_zero(text):
    assert parse_duration(text) is None
    assert parse_duration_days(text) == 0


def test_plain_integer_is_a_day_count():
    assert parse_duration("14") == VisaDuration(14, DurationUnit.DAYS)


def test_day_keyword_checked_before_month():
    # "days" wins even though "month" also appears
    assert parse_duration("90 days (3 months)") == VisaDuration(90, DurationUnit.DAYS)


def test_first_integer_token_is_the_magnitude():
    assert parse_duration("2 years, renewable 1 time") == VisaDuration(2, DurationUnit.YEARS)


def test_duration_label():
    assert parse_duration("1 year").label == "1 year"
    assert parse_duration("6 months").label == "6 months"
