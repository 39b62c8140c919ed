"""
Display formatting of stored bill fields.

Pure functions: dates are rendered as French short dates ("4 Avr. 04") and
raw status codes are mapped to their French labels.
"""

import re
from datetime import date, datetime
from typing import Any, Union

from billed.bills.exceptions import InvalidBillDateError
from billed.bills.models import BillStatus
from billed.bills.schemas import UnknownStatus

# Three first letters of the French abbreviated month, capitalized
MONTH_LABELS = (
    "Jan", "Fév", "Mar", "Avr", "Mai", "Jui",
    "Jui", "Aoû", "Sep", "Oct", "Nov", "Déc",
)

STATUS_LABELS = {
    BillStatus.PENDING: "En attente",
    BillStatus.ACCEPTED: "Accepté",
    BillStatus.REFUSED: "Refusé",
}

# YYYY-MM-DD, optionally followed by a time of day and UTC offset
ISO_DATE_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:\d{2})?)?",
    re.ASCII,
)


def parse_date(raw: Any) -> date:
    """
    Parse a stored bill date.

    Accepts `date`/`datetime` objects, ISO dates ("2004-04-04") and ISO
    date-times ("2004-04-04T10:00:00Z").

    Raises:
        InvalidBillDateError: If the value is not a calendar date
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise InvalidBillDateError(raw)

    match = ISO_DATE_PATTERN.fullmatch(raw.strip())
    if match is None:
        raise InvalidBillDateError(raw)

    # Calendar day as written, the time part is not converted
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidBillDateError(raw) from e


def format_date(raw: Any) -> str:
    """
    Format a stored bill date for display, e.g. "2004-04-04" -> "4 Avr. 04".

    Raises:
        InvalidBillDateError: If the value does not parse. Callers decide how to degrade.
    """
    parsed = parse_date(raw)
    return f"{parsed.day} {MONTH_LABELS[parsed.month - 1]}. {parsed.year % 100:02d}"


def format_status(raw: Any) -> Union[str, UnknownStatus]:
    """
    Map a raw status code to its display label.

    Never returns None: an unrecognized code yields an UnknownStatus value
    the caller can report.
    """
    try:
        return STATUS_LABELS[BillStatus(raw)]
    except ValueError:
        return UnknownStatus(code=raw)
