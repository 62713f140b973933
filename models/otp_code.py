"""
One-time login code model.
"""
from models import db
from datetime import datetime


class OTPCode(db.Model):
    """
    Stores the pending login code for an email.
    One record per email; overwritten on each new send.
    """
    __tablename__ = 'otp_codes'

    email = db.Column(db.String(255), primary_key=True)
    code = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def is_expired(self, now=None):
        return self.expires_at < (now or datetime.utcnow())

    def __repr__(self):
        return f'<OTPCode {self.email}>'
