from datetime import date, datetime


def to_date(value: date | datetime | str | None) -> date | None:
    """Normalize a view's date column; ISO strings are accepted, blanks become None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def month_key(value: date) -> str:
    return value.strftime("%Y-%m")


def add_months(value: date, months: int) -> date:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1)
