"""
Per-request session context: who is signed in, admin flag, and the open login log.
Built from the Flask session in before_request and kept on flask.g.
"""
from flask import g, session
from flask_login import login_user, logout_user, current_user

IS_ADMIN_KEY = 'is_admin'
LOGIN_LOG_KEY = 'login_log_id'
USER_KEY = 'user'


class SessionContext:
    """Explicit view of the session bag used by the route handlers."""

    def __init__(self, user_id=None, email=None, is_admin=False, login_log_id=None):
        self.user_id = user_id
        self.email = email
        self.is_admin = is_admin
        self.login_log_id = login_log_id

    @classmethod
    def load(cls):
        user = session.get(USER_KEY) or {}
        ctx = cls(
            user_id=user.get('id'),
            email=user.get('email'),
            is_admin=bool(session.get(IS_ADMIN_KEY, False)),
            login_log_id=session.get(LOGIN_LOG_KEY),
        )
        # Flask-Login is the source of truth for identity
        if ctx.user_id is not None and not current_user.is_authenticated:
            ctx.user_id = ctx.email = None
        return ctx

    @property
    def is_authenticated(self):
        return self.user_id is not None

    def sign_in(self, user, login_log):
        """Record identity and the login log that belongs to this session."""
        login_user(user)
        self.user_id = user.id
        self.email = user.email
        self.login_log_id = login_log.id
        self.save()

    def grant_admin(self):
        self.is_admin = True
        self.save()

    def save(self):
        if self.user_id is not None:
            session[USER_KEY] = {'id': self.user_id, 'email': self.email}
        else:
            session.pop(USER_KEY, None)
        if self.is_admin:
            session[IS_ADMIN_KEY] = True
        else:
            session.pop(IS_ADMIN_KEY, None)
        if self.login_log_id is not None:
            session[LOGIN_LOG_KEY] = self.login_log_id
        else:
            session.pop(LOGIN_LOG_KEY, None)

    def destroy(self):
        """Forget everything; an emptied session is deleted by the session interface."""
        logout_user()
        session.clear()
        self.user_id = self.email = self.login_log_id = None
        self.is_admin = False

    def __repr__(self):
        return f'<SessionContext user={self.email} admin={self.is_admin} log={self.login_log_id}>'


def get_session_context():
    """Return the context for this request, loading it on first use."""
    if 'session_ctx' not in g:
        g.session_ctx = SessionContext.load()
    return g.session_ctx
