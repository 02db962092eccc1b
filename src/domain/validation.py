"""
Field validation for contact form submissions.

All rules run independently and every violation is reported. The order of
messages is fixed: name, email, message, then the CRLF guard.
"""

import re
from typing import List, Optional

from .models import ContactPayload

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100
EMAIL_MIN_LENGTH = 5
EMAIL_MAX_LENGTH = 254
MESSAGE_MIN_LENGTH = 1
MESSAGE_MAX_LENGTH = 4000

NAME_ERROR = "Name must be between 1 and 100 characters."
EMAIL_ERROR = "Invalid email address."
MESSAGE_ERROR = "Message must be between 1 and 4000 characters."
CRLF_ERROR = "Invalid input: characters not allowed."

# Characters not allowed anywhere in an address: ASCII blanks, Unicode space
# separators, line/paragraph separators and the BOM. Unlike Python's \s, this
# set includes \ufeff and leaves out \x1c-\x1f and \x85.
WHITESPACE_CLASS = r'\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff'

EMAIL_PATTERN = re.compile(
    r'[^{ws}@]+@[^{ws}@]+\.[^{ws}@]+'.format(ws=WHITESPACE_CLASS)
)


def _length_between(value: Optional[str], minimum: int, maximum: int) -> bool:
    return bool(value) and minimum <= len(value) <= maximum


def is_valid_email(email: Optional[str]) -> bool:
    """Check email format and length bounds."""
    if not _length_between(email, EMAIL_MIN_LENGTH, EMAIL_MAX_LENGTH):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def contains_line_break(value: Optional[str]) -> bool:
    """Check for CR or LF, which could forge extra email headers."""
    return bool(value) and ('\r' in value or '\n' in value)


def validate_payload(payload: ContactPayload) -> List[str]:
    """
    Validate a decoded contact payload.

    Args:
        payload: Decoded form fields

    Returns:
        List[str]: Violation messages in rule order (empty if valid)
    """
    errors = []

    if not _length_between(payload.name, NAME_MIN_LENGTH, NAME_MAX_LENGTH):
        errors.append(NAME_ERROR)

    if not is_valid_email(payload.email):
        errors.append(EMAIL_ERROR)

    if not _length_between(payload.message, MESSAGE_MIN_LENGTH, MESSAGE_MAX_LENGTH):
        errors.append(MESSAGE_ERROR)

    # Name and email end up in the Subject and Reply-To headers
    if contains_line_break(payload.name) or contains_line_break(payload.email):
        errors.append(CRLF_ERROR)

    return errors
