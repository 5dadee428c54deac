"""Transaction amount extraction from recognized slip text."""

import re
from decimal import Decimal, InvalidOperation

from slip_ocr.utils.logger import get_logger

logger = get_logger(__name__)

_NUMBER = r"([0-9,]+(?:\.[0-9]{2})?)"

# Most specific first. The bare digit-run fallbacks only catch slips
# whose currency label was misread.
_AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # MoneyGram
    re.compile(rf"Amount\s*{_NUMBER}\s*LAK", re.IGNORECASE),
    re.compile(r"^([0-9,]{3,})\s*LAK$", re.IGNORECASE | re.MULTILINE),
    # LDB
    re.compile(rf"ຈ້ານວນເງິນ\s*:?\s*K?\s*-?{_NUMBER}", re.IGNORECASE),
    # BCEL
    re.compile(rf"-{_NUMBER}\s*LAK", re.IGNORECASE),
    re.compile(rf"ຈໍານວນຊໍາລະ[:\s]*{_NUMBER}", re.IGNORECASE),
    re.compile(rf"{_NUMBER}\s*(?:ກີບ|LAK)", re.IGNORECASE),
    # Bare digit runs
    re.compile(
        r"(?:^|\s)([0-9,]{6,}(?:\.[0-9]{2})?)\s*(?:$|\s)",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(
        r"(?:^|\s)([0-9,]{4,}(?:\.[0-9]{2})?)\s*(?:$|\s)",
        re.IGNORECASE | re.MULTILINE,
    ),
)


def strip_grouping(value: str) -> str:
    """Remove thousands separators from a captured amount."""
    return value.replace(",", "")


def _parse_positive(value: str) -> Decimal | None:
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    return number if number > 0 else None


def extract_amount(text: str) -> str | None:
    """Extract the transaction amount from slip text.

    Patterns are tried in priority order and only the first match of
    each is considered. A capture that is zero or not a number counts
    as a miss and the next pattern is tried.

    Args:
        text: Recognized slip text.

    Returns:
        The amount without separators or currency (e.g. ``"150000"``,
        ``"1250.50"``), or ``None`` if no pattern yields a positive value.
    """
    for pattern in _AMOUNT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        cleaned = strip_grouping(match.group(1))
        if _parse_positive(cleaned) is not None:
            logger.debug("Amount %s matched %r", cleaned, pattern.pattern)
            return cleaned
    return None
