"""Transaction date extraction and normalization.

Slips print dates as ``DD/MM/YY`` (MoneyGram), ``YYYY-MM-DD`` (LDB) or
assorted day-first forms (BCEL). Every accepted date is emitted as
``MM/DD/YYYY``.
"""

import re

from slip_ocr.utils.logger import get_logger

logger = get_logger(__name__)

YEAR_PIVOT = 50

_DATE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE | re.ASCII)
    for pattern in (
        # MoneyGram
        r"(\d{2}/\d{2}/\d{2})\s+\d{2}:\d{2}:\d{2}",
        r"Transfer Completed.*?(\d{2}/\d{2}/\d{2})",
        # LDB
        r"(\d{4}-\d{2}-\d{2})\s+\d{2}:\d{2}:\d{2}",
        # BCEL
        r"ຊໍາລະ[/\s]*(\d{1,2}[/-]\d{1,2}[/-](?:\d{4}|\d{2}))",
        # Generic
        r"(\d{1,2}[/-]\d{1,2}[/-]\d{2})(?!\d)",
        r"(\d{1,2}[/-]\d{1,2}[/-]\d{4})",
        r"(\d{4}[/-]\d{1,2}[/-]\d{1,2})",
    )
)

_SEPARATORS = re.compile(r"[/\-.]")


def expand_year(year: int) -> int:
    """Expand a two-digit year: up to 50 is 20xx, above is 19xx."""
    if year >= 100:
        return year
    return 2000 + year if year <= YEAR_PIVOT else 1900 + year


def _split(date_str: str) -> tuple[int, int, int] | None:
    parts = _SEPARATORS.split(date_str)
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None
    first, second, third = (int(p) for p in parts)
    return first, second, third


def is_plausible_date(date_str: str) -> bool:
    """Check that a captured date could be a real calendar date.

    A first component above 1900 is read as year-month-day; anything
    else as day-month-year with the year expanded by :func:`expand_year`.

    Args:
        date_str: Captured date such as ``"25/09/24"`` or ``"2024-03-15"``.

    Returns:
        ``True`` if the components are in range for their reading.
    """
    parts = _split(date_str)
    if parts is None:
        return False
    first, second, third = parts

    if first > 1900:
        return 1 <= second <= 12 and 1 <= third <= 31

    if 1 <= first <= 31 and 1 <= second <= 12:
        return 1900 <= expand_year(third) <= 2100
    return False


def format_date(date_str: str) -> str:
    """Format a plausible captured date as ``MM/DD/YYYY``.

    Args:
        date_str: A date accepted by :func:`is_plausible_date`.

    Returns:
        Month-first date with zero-padded month and day and a four-digit year.
    """
    parts = _split(date_str)
    if parts is None:
        raise ValueError(f"Not a three-part date: {date_str!r}")
    first, second, third = parts

    if first > 1900:
        year, month, day = first, second, third
    else:
        day, month, year = first, second, expand_year(third)
    return f"{month:02d}/{day:02d}/{year:04d}"


def extract_date(text: str) -> str | None:
    """Extract the transaction date from slip text.

    The first match of each pattern is checked with
    :func:`is_plausible_date`; an implausible capture moves on to the
    next pattern instead of returning a guess.

    Args:
        text: Recognized slip text.

    Returns:
        The date as ``MM/DD/YYYY``, or ``None``.
    """
    for pattern in _DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        captured = match.group(1)
        if is_plausible_date(captured):
            formatted = format_date(captured)
            logger.debug("Date %s -> %s via %r", captured, formatted, pattern.pattern)
            return formatted
        logger.debug("Rejected implausible date %s", captured)
    return None
