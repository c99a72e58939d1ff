"""Free-text visa duration parsing.

Visa types used to carry their validity as text ("30", "30 days",
"6 months", "1 year"). New visa types store a structured duration; this
parser only runs where legacy text is accepted or imported.
"""
import logging
import re
from typing import Optional

from app.models.visa_type import DurationUnit, VisaDuration

logger = logging.getLogger(__name__)

_INTEGER_TOKEN = re.compile(r"\d+", re.ASCII)

# Checked in this order; the first keyword present wins
_UNIT_KEYWORDS = (
    ("day", DurationUnit.DAYS),
    ("month", DurationUnit.MONTHS),
    ("year", DurationUnit.YEARS),
)


def parse_duration(text: Optional[str]) -> Optional[VisaDuration]:
    """
    Parse a duration expression into a structured duration.

    A string made only of digits is a day count. Otherwise the first
    unit keyword found (day, month, year) gives the unit and the first
    integer token in the string gives the magnitude.

    Returns None when the duration cannot be determined, including zero or
    negative magnitudes.
    """
    if text is None:
        return None

    raw = text.strip()
    if not raw:
        return None

    if _INTEGER_TOKEN.fullmatch(raw):
        magnitude = int(raw)
        if magnitude <= 0:
            return None
        return VisaDuration(magnitude, DurationUnit.DAYS)

    lowered = raw.lower()
    for keyword, unit in _UNIT_KEYWORDS:
        if keyword in lowered:
            match = _INTEGER_TOKEN.search(lowered)
            if not match:
                return None
            magnitude = int(match.group())
            if magnitude <= 0:
                return None
            return VisaDuration(magnitude, unit)

    logger.debug(f"Unrecognised visa duration: {text!r}")
    return None


def parse_duration_days(text: Optional[str]) -> int:
    """Day count for a duration expression; 0 means it could not be determined."""
    duration = parse_duration(text)
    return duration.days if duration else 0
