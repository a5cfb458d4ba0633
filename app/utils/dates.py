from datetime import date
from typing import Optional

def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Parse the calendar date out of a stored date key.

    Accepts "YYYY-MM-DD" as well as ISO timestamps ("YYYY-MM-DDTHH:MM:SSZ").
    Returns None for anything else.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None
