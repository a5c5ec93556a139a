"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

# Local mobile numbers: 11 digits starting with 09
PHONE_PREFIX = "09"
PHONE_DIGITS = 11
PHONE_PATTERN = re.compile(rf"^{PHONE_PREFIX}\d{{{PHONE_DIGITS - len(PHONE_PREFIX)}}}$")

# Consumer email providers accepted on the public booking form
BOOKING_EMAIL_DOMAINS = ("gmail", "yahoo", "hotmail")
BOOKING_EMAIL_PATTERN = re.compile(
    rf"^[a-zA-Z0-9._%+-]+@({'|'.join(BOOKING_EMAIL_DOMAINS)})\.com$"
)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s]+$")

PHONE_ERROR = "Please enter a valid phone number (must start with 09 and be exactly 11 digits)"
BOOKING_EMAIL_ERROR = (
    "Please enter a valid email address (only Gmail, Yahoo, or Hotmail addresses are accepted)"
)


def phone_digits(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def is_valid_phone(phone: Optional[str]) -> bool:
    """Accept only if the digits alone are exactly 11 long and start with 09"""
    return bool(PHONE_PATTERN.match(phone_digits(phone)))


def validate_phone(phone: Optional[str]) -> str:
    """
    Validate a local mobile number and return its digits.

    Raises:
        ValueError: If the number is missing, not 11 digits or lacks the 09 prefix
    """
    digits = phone_digits(phone)
    if not digits:
        raise ValueError("Phone number is required")
    if len(digits) != PHONE_DIGITS:
        raise ValueError("Phone number must be exactly 11 digits")
    if not digits.startswith(PHONE_PREFIX):
        raise ValueError("Phone number must start with 09")
    return digits


def is_valid_booking_email(email: Optional[str]) -> bool:
    return bool(email and BOOKING_EMAIL_PATTERN.match(email))


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


def is_valid_name(value: Optional[str]) -> bool:
    return bool(value and NAME_PATTERN.match(value))


def normalize_date_string(value: Optional[str]) -> str:
    """
    Reduce an ISO date or datetime string to its zero-padded calendar day.

    '2025-6-5', '2025-06-05T00:00:00.000Z' -> '2025-06-05'

    Raises:
        ValueError: If the value does not name a real calendar day
    """
    if not value:
        raise ValueError("Date is required")

    day_part = str(value).split("T")[0].strip()
    try:
        year, month, day = (int(part) for part in day_part.split("-"))
        return date(year, month, day).isoformat()
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid date: {value}") from e
