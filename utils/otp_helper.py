"""
OTP generation, storage and verification for email login.
A new code for an email replaces any code still pending for it.
"""
import secrets
from datetime import datetime, timedelta

from models import db
from models.otp_code import OTPCode

# OTP length and expiry
OTP_LENGTH = 6
OTP_EXPIRY_MINUTES = 5


class OTPError(Exception):
    """Base class for login code verification failures."""
    message = "Invalid OTP."

    def __init__(self, email):
        super().__init__(f"{self.message} ({email})")
        self.email = email


class OTPNotFound(OTPError):
    message = "No OTP found. Please request a new OTP."


class OTPExpired(OTPError):
    message = "OTP expired. Please request a new OTP."


class OTPMismatch(OTPError):
    message = "Incorrect OTP."


def generate_otp() -> str:
    """Generate an OTP_LENGTH-digit numeric OTP with no leading zero (100000-999999)."""
    low = 10 ** (OTP_LENGTH - 1)
    return str(secrets.randbelow(9 * low) + low)


def otp_expires_at(now=None) -> datetime:
    """Return expiry datetime for new OTP (5 minutes from now)."""
    return (now or datetime.utcnow()) + timedelta(minutes=OTP_EXPIRY_MINUTES)


def issue_otp(email: str) -> OTPCode:
    """Create or overwrite the pending code for email and commit it."""
    code = generate_otp()
    expires = otp_expires_at()
    row = OTPCode.query.get(email)
    if row:
        row.code = code
        row.expires_at = expires
        row.created_at = datetime.utcnow()
    else:
        row = OTPCode(email=email, code=code, expires_at=expires)
        db.session.add(row)
    db.session.commit()
    return row


def consume_otp(email: str, code: str) -> None:
    """
    Check a submitted code and delete the stored one on success.

    Raises OTPNotFound, OTPExpired (stale record is deleted) or OTPMismatch
    (record is kept). A matched code is deleted and committed before returning,
    so it cannot be replayed even if the login that follows fails.
    """
    row = OTPCode.query.get(email)
    if not row:
        raise OTPNotFound(email)

    if row.is_expired():
        db.session.delete(row)
        db.session.commit()
        raise OTPExpired(email)

    if row.code != code:
        raise OTPMismatch(email)

    db.session.delete(row)
    db.session.commit()
