"""
Models package for the Gaming Hub application
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Import all models here to ensure they're registered
from models.user import User
from models.otp_code import OTPCode
from models.login_log import LoginLog

__all__ = [
    'db',
    'User',
    'OTPCode',
    'LoginLog',
]
