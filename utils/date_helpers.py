from datetime import date, datetime, timezone
import calendar
from utils.constants import DATE_FORMAT, MONTH_FORMAT, MONTH_NAMES, YEAR_OPTION_SPAN


def today() -> date:
    return date.today()


def utc_timestamp(moment: datetime | None = None) -> str:
    """UTC ISO timestamp with millisecond precision and a Z suffix.

    A naive ``moment`` is taken as local time. Defaults to now.
    """
    aware = (moment or datetime.now()).astimezone(timezone.utc)
    return aware.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def parse_date(date_str: str) -> date | None:
    """Parse the calendar date of a YYYY-MM-DD string or ISO timestamp.

    Only the leading date part is read, so '2024-03-01T00:00:00.000Z' is March 1st
    regardless of the local timezone. Returns None on failure.
    """
    if not date_str:
        return None
    head = str(date_str)[:10]
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(head, fmt).date()
        except ValueError:
            continue
    return None


def parse_datetime(value: str) -> datetime | None:
    """Parse a date or ISO timestamp into a naive local datetime.

    A bare date becomes local midnight; an aware timestamp ('Z' or offset) is
    converted to local time before the tzinfo is dropped.
    """
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        d = parse_date(text)
        return datetime(d.year, d.month, d.day) if d else None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)


def month_key(date_str: str) -> str | None:
    """'2024-03-15' -> '2024-03'."""
    d = parse_date(date_str)
    return format_month(d) if d else None


def parse_month(month_str: str) -> date | None:
    """Return the first day of the given YYYY-MM month string."""
    if not month_str:
        return None
    try:
        return datetime.strptime(month_str, MONTH_FORMAT).date()
    except ValueError:
        return None


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def month_name(month_index: int) -> str:
    """0-based month index -> 'January'..'December'."""
    return MONTH_NAMES[month_index]


def friendly_month(month_str: str) -> str:
    """Convert YYYY-MM to e.g. 'February 2026'."""
    d = parse_month(month_str)
    if d is None:
        return month_str
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def format_display_date(date_str: str) -> str:
    """Convert a stored date to the user-facing form, e.g. 'Mar 1, 2024'."""
    if not date_str:
        return date_str
    d = parse_date(date_str)
    if d is None:
        return date_str
    return f"{MONTH_NAMES[d.month - 1][:3]} {d.day}, {d.year}"


def year_options(center: int | None = None, span: int = YEAR_OPTION_SPAN) -> list[str]:
    """Selectable years, centred on the current year: 2024 -> ['2022', ..., '2026']."""
    year = center if center is not None else today().year
    start = year - span // 2
    return [str(start + i) for i in range(span)]
