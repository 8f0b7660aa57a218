"""
Input validation shared by auth use cases.

Validation runs before any store access; failures are VALIDATION_ERROR.
"""

from email_validator import EmailNotValidError, validate_email

from src.libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def validate_email_address(email: str) -> Result[None]:
    """Check that ``email`` is a well-formed address (no DNS lookups)"""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return Return.err(Error("VALIDATION_ERROR", "Invalid email address"))
    return Return.ok(None)


def validate_password(password: str) -> Result[None]:
    """Check password length rules"""
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        )

    try:
        encoded = password.encode("utf-8")
    except UnicodeEncodeError:
        return Return.err(Error("VALIDATION_ERROR", "Password contains invalid characters"))

    if len(encoded) > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            )
        )

    return Return.ok(None)
