from __future__ import annotations

import pytest

from userhub.validation import (
    validate_email_format,
    validate_identifier,
    validate_non_negative_age,
    validate_required_text,
)


@pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
def test_required_text_rejects_blank_values(value) -> None:
    assert validate_required_text(value) is False


def test_required_text_accepts_padded_text() -> None:
    assert validate_required_text("  Alice  ") is True


def test_non_negative_age_accepts_zero() -> None:
    assert validate_non_negative_age(0) is True
    assert validate_non_negative_age(42) is True


def test_non_negative_age_rejects_missing_or_negative() -> None:
    assert validate_non_negative_age(None) is False
    assert validate_non_negative_age(-1) is False


@pytest.mark.parametrize("value", [None, 0, -5, True])
def test_identifier_must_be_positive(value) -> None:
    assert validate_identifier(value) is False


def test_identifier_accepts_positive_integer() -> None:
    assert validate_identifier(1) is True


@pytest.mark.parametrize(
    "email",
    [
        "alice@example.com",
        "a@bc.de",
        "first.last@sub.example.org",
        "x@y@z.com",
    ],
)
def test_email_format_accepts_loose_addresses(email: str) -> None:
    assert validate_email_format(email) is True


@pytest.mark.parametrize(
    "email",
    [
        None,
        "",
        "   ",
        "plainaddress",
        "@example.com",
        "alice@.com",
        "alice@example",
        "alice.example@com",
    ],
)
def test_email_format_rejects_malformed_addresses(email) -> None:
    assert validate_email_format(email) is False


def test_email_format_requires_more_than_five_characters() -> None:
    assert validate_email_format("a@b.c") is False
    assert validate_email_format("a@b.co") is True


def test_non_negative_age_rejects_values_beyond_integer_column() -> None:
    assert validate_non_negative_age(2**63 - 1) is True
    assert validate_non_negative_age(2**63) is False
