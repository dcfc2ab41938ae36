# smart_attendance/app/services/data_validation/format_helpers.py
"""
Field specific heuristics for values that fail a format rule.

Two independent helpers:

- ``generate_format_suggestion`` proposes a value the user may choose to
  apply; it is attached to the INVALID_FORMAT finding.
- ``auto_correct_format`` computes the replacement written into the
  corrected copy of the record.

A value can get a suggestion without a correction and the other way round.
"""

import re
from typing import Any, Optional

NON_ALPHANUMERIC = re.compile(r"[^A-Z0-9]", re.IGNORECASE)
NON_DIGIT = re.compile(r"\D")
WORD_START = re.compile(r"\b\w", re.ASCII)

PHONE_FIELDS = ("contact_number", "parent_contact")
ROLL_NUMBER_LENGTH = (4, 15)


def as_text(value: Any) -> str:
    if value is None:
        return ""
    # 9876543210.0 from a spreadsheet cell is 9876543210
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def digits_only(value: Any) -> str:
    return NON_DIGIT.sub("", as_text(value))


def generate_format_suggestion(
    field: str,
    value: Any,
    *,
    default_email_domain: str = "university.edu",
    phone_min_digits: int = 10,
) -> Optional[str]:
    """Return a suggested replacement or None when nothing sensible exists."""
    val = as_text(value)

    if field == "email":
        if "@" not in val:
            return f"{val}@{default_email_domain}"
        if "." not in val:
            return f"{val}.com"
        return None

    if field == "roll_number":
        cleaned = NON_ALPHANUMERIC.sub("", val).upper()
        low, high = ROLL_NUMBER_LENGTH
        if low <= len(cleaned) <= high:
            return cleaned
        return None

    if field in PHONE_FIELDS:
        digits = digits_only(val)
        if len(digits) >= phone_min_digits:
            return f"+{digits}"
        return None

    return None


def auto_correct_format(
    field: str, value: Any, *, phone_min_digits: int = 10
) -> Optional[str]:
    """Return the corrected value, or None for fields without a correction."""
    val = as_text(value)

    if field == "name":
        # capitalize the first letter of every word, leave the rest alone
        return WORD_START.sub(lambda m: m.group(0).upper(), val).strip()

    if field == "roll_number":
        return NON_ALPHANUMERIC.sub("", val).upper()

    if field == "email":
        return val.lower().strip()

    if field == "department":
        return val[:1].upper() + val[1:].lower()

    if field in PHONE_FIELDS:
        digits = digits_only(val)
        return f"+{digits}" if len(digits) >= phone_min_digits else val

    return None
