"""Strict calendar-date parsing and default search window resolution"""

from datetime import date, datetime, timedelta
from typing import Optional

from blocksearch.core.errors import ValidationError
from blocksearch.core.models import DateRange


DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str, field: str = "date") -> date:
    """Parse a strict YYYY-MM-DD string; it must round-trip exactly."""
    try:
        parsed = datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD.") from e
    if parsed.strftime(DATE_FORMAT) != value:
        raise ValidationError(f"Invalid {field} format. Use YYYY-MM-DD.")
    return parsed


def resolve_range(
    after: Optional[str] = None,
    before: Optional[str] = None,
    today: Optional[date] = None,
    window_days: int = 30,
    ) -> tuple[DateRange, bool]:
    """Validate date flags into a DateRange.

    Returns (range, defaulted). When neither flag is given the range is the
    trailing window of window_days ending today and defaulted is True.
    """
    if not after and not before:
        today = today or date.today()
        return DateRange(after=today - timedelta(days=window_days)), True
    before_day = parse_date(before, "date-before") if before else None
    after_day = parse_date(after, "date-after") if after else None
    return DateRange(after=after_day, before=before_day), False
