from datetime import datetime
from typing import Optional

from project_utils.starter_class import get_logger

logger = get_logger(__name__)

SHEET_TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
DATE_NOT_AVAILABLE = "Date not available"
INVALID_DATE = "Invalid date"


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_long(moment: datetime) -> str:
    """Render e.g. 'April 29th, 2023 at 1:00:00 PM'."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.strftime('%B')} {ordinal(moment.day)}, {moment.year}"
        f" at {hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def format_submission_time(timestamp: Optional[str],
                           input_format: str = SHEET_TIMESTAMP_FORMAT) -> str:
    """
    Parse a spreadsheet timestamp lazily for display.
    Missing -> 'Date not available'; unparseable -> 'Invalid date'.
    """
    if not timestamp or not timestamp.strip():
        return DATE_NOT_AVAILABLE
    try:
        moment = datetime.strptime(timestamp.strip(), input_format)
    except ValueError:
        logger.debug("Unparseable timestamp %r (format %r)", timestamp, input_format)
        return INVALID_DATE
    return format_long(moment)
