"""
Login history model
"""
from models import db
from datetime import datetime


class LoginLog(db.Model):
    """One record per signed-in session: opened on login, closed on logout."""
    __tablename__ = 'login_logs'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    login_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    logout_at = db.Column(db.DateTime, nullable=True)

    def close(self, when=None):
        """Set logout time once; later calls leave it unchanged."""
        if self.logout_at is None:
            self.logout_at = when or datetime.utcnow()

    @property
    def duration(self):
        if self.logout_at is None:
            return None
        return self.logout_at - self.login_at

    def __repr__(self):
        return f'<LoginLog {self.email} {self.login_at}>'
