"""Assorted utility helpers."""
import re
from datetime import date

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_iso_date(value):
    """Parse a ``YYYY-MM-DD`` string; return ``None`` when it is not a date."""
    if isinstance(value, date):
        return value
    text = str(value).strip() if value is not None else ""
    if not ISO_DATE.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except (TypeError, ValueError):
        return None


def coerce_number(value):
    """Coerce form input to a number the way an HTML number field does.

    Blank input becomes ``0``; integral values come back as ``int`` so they
    survive a JSON round trip unchanged. Raises ``ValueError`` otherwise.
    """
    if isinstance(value, bool):
        raise ValueError("not a number")
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0
        num = float(text)
    if num != num or num in (float("inf"), float("-inf")):
        raise ValueError("not a number")
    return int(num) if num.is_integer() else num


def is_blank(value) -> bool:
    """True for ``None``, empty or whitespace-only strings and zero numbers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False
