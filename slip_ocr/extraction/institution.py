"""Institution classifier for Lao payment slips.

Identifies which bank or remittance service issued a slip from its
recognized text. Signatures are tried top to bottom and the first one
that matches decides the institution; there is no scoring. The order
resolves ambiguity: MoneyGram's generic transfer phrases are checked
before the LDB reference-number shapes, which incidental digit runs
on a MoneyGram slip could otherwise satisfy.
"""

import re
from enum import StrEnum

from slip_ocr.utils.logger import get_logger

logger = get_logger(__name__)


class Institution(StrEnum):
    """Issuers recognized by the classifier."""

    MONEYGRAM = "MONEYGRAM"
    LDB = "LDB"
    BCEL = "BCEL"
    UNKNOWN = "UNKNOWN"


# (pattern, institution) in priority order. Do not reorder. Digits are ASCII only.
_INSTITUTION_SIGNATURES: tuple[tuple[re.Pattern[str], Institution], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE | re.ASCII), institution)
    for pattern, institution in (
        # MoneyGram
        (r"MoneyGram|ລຸນບູຮວມປຮະ", Institution.MONEYGRAM),
        (r"Transfer Completed", Institution.MONEYGRAM),
        (r"From account.*To account", Institution.MONEYGRAM),
        (r"Bill number.*Ticket number", Institution.MONEYGRAM),
        (r"Service fee", Institution.MONEYGRAM),
        # LDB
        (r"FT\d{5}[A-Z0-9]+", Institution.LDB),
        (r"FQR\d{6}[A-Z0-9]+", Institution.LDB),
        (r"ຈ້ານວນເງິນ", Institution.LDB),
        (r"ຄາທໍານຽມ", Institution.LDB),
        (r"\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2}", Institution.LDB),
        # BCEL
        (r"BCEL One|OnePay|TMN Online", Institution.BCEL),
        (r"133-12-xxxxx829", Institution.BCEL),
        (r"ສໍາເລັດ.*\d{2}:\d{2}:\d{2}", Institution.BCEL),
        (r"ເລກອ້າງອີງ.*[A-Z0-9]{12}", Institution.BCEL),
    )
)


def classify_institution(text: str) -> Institution:
    """Return the issuer of the first signature found in ``text``.

    Args:
        text: Recognized slip text.

    Returns:
        The matching institution, or ``Institution.UNKNOWN``.
    """
    for pattern, institution in _INSTITUTION_SIGNATURES:
        if pattern.search(text):
            logger.debug("Institution %s matched %r", institution, pattern.pattern)
            return institution
    return Institution.UNKNOWN
