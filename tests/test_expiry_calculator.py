from datetime import date

import pytest

from app.core.exceptions import DurationUndeterminedError
from app.models.visa_type import DurationUnit, VisaType
from app.services.expiry_calculator import compute_expiry


def visa_type(value, unit):
    return VisaType(type="Work Permit", country_name="United Kingdom", duration_value=value, duration_unit=unit)


def test_ninety_days():
    assert compute_expiry(date(2024, 3, 1), visa_type(90, DurationUnit.DAYS)) == date(2024, 5, 30)


def test_months_are_thirty_days():
    assert compute_expiry(date(2024, 1, 1), visa_type(6, DurationUnit.MONTHS)) == date(2024, 6, 29)


def test_year_is_365_days_even_across_leap_day():
    assert compute_expiry(date(2024, 1, 1), visa_type(1, DurationUnit.YEARS)) == date(2024, 12, 31)


def test_missing_duration_raises():
    with pytest.raises(DurationUndeterminedError) as exc:
        compute_expiry(date(2024, 3, 1), visa_type(None, None))
    assert exc.value.duration is None
    assert "Expiry date could not be calculated" in exc.value.message


def test_missing_issue_date_raises():
    with pytest.raises(DurationUndeterminedError) as exc:
        compute_expiry(None, visa_type(90, DurationUnit.DAYS))
    assert exc.value.duration == "90 days"
    assert exc.value.to_dict()["code"] == "DURATION_UNDETERMINED"


def test_expiry_past_last_representable_date_raises():
    with pytest.raises(DurationUndeterminedError) as exc:
        compute_expiry(date(2024, 3, 1), visa_type(10000, DurationUnit.YEARS))
    assert exc.value.duration == "10000 years"
