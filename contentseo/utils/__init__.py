from .date_utils import parse_date, to_utc, utc_now, format_date, days_since, months_ago

__all__ = [
    "parse_date", "to_utc", "utc_now", "format_date", "days_since", "months_ago",
]
