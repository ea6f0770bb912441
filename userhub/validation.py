"""Field-level checks applied before any user record is written."""

from __future__ import annotations

from typing import Optional

from .models import MAX_STORED_INTEGER

_MIN_EMAIL_LENGTH = 5


def validate_required_text(value: Optional[str]) -> bool:
    """Return ``True`` when ``value`` contains at least one non-whitespace character."""

    return value is not None and bool(value.strip())


def validate_non_negative_age(value: Optional[int]) -> bool:
    return value is not None and 0 <= value <= MAX_STORED_INTEGER


def validate_identifier(value: Optional[int]) -> bool:
    if value is None or isinstance(value, bool):
        return False
    return value > 0


def validate_email_format(value: Optional[str]) -> bool:
    """Loose syntactic email check.

    The address needs an ``@`` that is not the first character, a ``.`` that
    appears at least two characters after that ``@`` and more than five
    characters in total. This is not a grammar validator; addresses such as
    ``a@b.c`` are rejected purely on length.
    """

    if not validate_required_text(value):
        return False

    at_index = value.find("@")
    if at_index <= 0:
        return False

    dot_index = value.rfind(".")
    if dot_index <= at_index + 1:
        return False

    return len(value) > _MIN_EMAIL_LENGTH


__all__ = [
    "validate_email_format",
    "validate_identifier",
    "validate_non_negative_age",
    "validate_required_text",
]
