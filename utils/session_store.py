"""
Server-side session storage.
The cookie holds only an opaque random token; session data lives in the store.
"""
import secrets
import time
from threading import Lock

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict


class ServerSession(CallbackDict, SessionMixin):
    """Session dict that tracks modification and carries its store token."""

    def __init__(self, initial=None, token=None, new=False):
        def on_update(self):
            self.modified = True
        CallbackDict.__init__(self, initial, on_update)
        self.token = token
        self.new = new
        self.modified = False


class MemorySessionStore:
    """Process-local token -> session data map with per-entry expiry."""

    def __init__(self, clock=time.monotonic):
        self._data = {}
        self._lock = Lock()
        self._clock = clock

    def _prune(self, now):
        expired = [token for token, (expires, _) in self._data.items() if expires <= now]
        for token in expired:
            del self._data[token]

    def get(self, token):
        with self._lock:
            entry = self._data.get(token)
            if entry is None:
                return None
            expires, data = entry
            if expires <= self._clock():
                del self._data[token]
                return None
            return dict(data)

    def set(self, token, data, lifetime):
        """Store data for lifetime (a timedelta); expired entries are dropped."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            self._data[token] = (now + lifetime.total_seconds(), dict(data))

    def delete(self, token):
        with self._lock:
            self._data.pop(token, None)

    def __contains__(self, token):
        return self.get(token) is not None

    def __len__(self):
        with self._lock:
            self._prune(self._clock())
            return len(self._data)


class ServerSideSessionInterface(SessionInterface):
    """Flask session interface backed by any store with get/set/delete.

    Entries live for PERMANENT_SESSION_LIFETIME from their last write.
    """

    def __init__(self, store=None):
        self.store = store if store is not None else MemorySessionStore()

    def _new_token(self):
        return secrets.token_urlsafe(32)

    def open_session(self, app, request):
        token = request.cookies.get(self.get_cookie_name(app))
        if token:
            data = self.store.get(token)
            if data is not None:
                return ServerSession(data, token=token)
        return ServerSession(token=self._new_token(), new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        # Emptied session: drop the stored record and the cookie
        if not session:
            if session.modified:
                self.store.delete(session.token)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not self.should_set_cookie(app, session):
            return

        self.store.set(session.token, session, app.permanent_session_lifetime)
        response.set_cookie(
            name,
            session.token,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
