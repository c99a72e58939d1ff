"""Visa expiry derivation."""
import logging
from datetime import date, timedelta
from typing import Optional

from app.core.exceptions import DurationUndeterminedError
from app.models.visa_type import VisaType

logger = logging.getLogger(__name__)


def compute_expiry(issue_date: Optional[date], visa_type: VisaType) -> date:
    """
    Expiry date for a visa issued on issue_date under visa_type.

    Plain calendar-day addition of the visa type's duration in days.
    Raises DurationUndeterminedError when the issue date is missing or the
    duration is unknown or not positive, and when the expiry would fall
    past the last representable date.
    """
    days = visa_type.duration_days
    if issue_date is None or days <= 0:
        raise DurationUndeterminedError(visa_type.duration_label, issue_date)

    try:
        expiry = issue_date + timedelta(days=days)
    except OverflowError:
        logger.warning(f"Expiry for duration {visa_type.duration_label} from {issue_date.isoformat()} is out of range")
        raise DurationUndeterminedError(visa_type.duration_label, issue_date)

    logger.info(
        f"Calculated expiry date {expiry.isoformat()} from issue date "
        f"{issue_date.isoformat()} and duration {visa_type.duration_label} ({days} days)"
    )
    return expiry
