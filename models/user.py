"""
User model definition
"""
from models import db
from datetime import datetime
from flask_login import UserMixin

class User(UserMixin, db.Model):
    """Registered player, created on first successful OTP login"""
    __tablename__ = 'users'
    
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def find_or_create(cls, email):
        """Return the user for this email, adding a new one to the session if absent."""
        user = cls.query.filter_by(email=email).first()
        if not user:
            user = cls(email=email)
            db.session.add(user)
            db.session.flush()
        return user
    
    def __repr__(self):
        return f'<User {self.email}>'
