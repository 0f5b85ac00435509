import re
from datetime import date, datetime, timedelta, timezone
from typing import List, Union

from errors import InvalidDate

ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def parse_date(s: str) -> date:
    if not isinstance(s, str) or not ISO_DATE.fullmatch(s):
        raise InvalidDate("Invalid date format. Expected YYYY-MM-DD.")
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise InvalidDate("Invalid date.") from None


def format_date(d: Union[date, datetime]) -> str:
    if isinstance(d, datetime):
        d = d.astimezone(timezone.utc).date() if d.tzinfo else d.date()
    return d.isoformat()


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def start_of_week(d: Union[date, datetime], week_starts_on: int = 1) -> date:
    """Start of the week containing ``d``.

    ``week_starts_on`` counts from Sunday=0, so 1 is Monday.
    """
    if isinstance(d, datetime):
        d = date.fromisoformat(format_date(d))
    weekday = (d.weekday() + 1) % 7
    return add_days(d, -((weekday - week_starts_on + 7) % 7))


def date_range(start: date, end: date) -> List[date]:
    return [add_days(start, i) for i in range((end - start).days + 1)]
