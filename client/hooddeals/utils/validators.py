# client/hooddeals/utils/validators.py

import math
import re

from hooddeals.core.errors import FormValidationError


EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6


def require(value: str, message: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise FormValidationError(message, field=field)
    return value


def parse_price(text: str) -> float:
    """
    "12", "12.50" and "$12" are accepted; anything non-numeric, non-finite,
    zero or negative is rejected.
    """
    raw = require(text, "Please enter a price.", "price").lstrip("$").replace(",", "")
    try:
        price = float(raw)
    except ValueError:
        raise FormValidationError("Invalid price.", field="price")
    if not math.isfinite(price) or price <= 0:
        raise FormValidationError("Invalid price.", field="price")
    return round(price, 2)


def validate_email(email: str) -> str:
    email = require(email, "Please enter your email.", "email")
    if not EMAIL_RE.match(email):
        raise FormValidationError("Please enter a valid email address.", field="email")
    return email


def validate_new_password(password: str, confirm_password: str) -> str:
    if not password:
        raise FormValidationError("Please enter a password.", field="password")
    if password != confirm_password:
        raise FormValidationError("Passwords do not match", field="confirm_password")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise FormValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", field="password"
        )
    return password
