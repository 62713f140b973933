from datetime import timedelta

import pytest

from app import create_app
from config import TestingConfig
from models import db
from tests.conftest import sign_in
from utils.session_store import MemorySessionStore, ServerSideSessionInterface


class MemorySessionConfig(TestingConfig):
    SESSION_BACKEND = 'memory'


class ExpiredSessionConfig(MemorySessionConfig):
    PERMANENT_SESSION_LIFETIME = timedelta(seconds=0)


@pytest.fixture
def memory_app():
    app = create_app(MemorySessionConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


def test_memory_store_roundtrip():
    store = MemorySessionStore()
    store.set('t1', {'a': 1}, timedelta(hours=1))
    assert 't1' in store
    assert store.get('t1') == {'a': 1}
    store.delete('t1')
    assert store.get('t1') is None
    assert len(store) == 0


def test_memory_backend_keeps_data_server_side(memory_app):
    assert isinstance(memory_app.session_interface, ServerSideSessionInterface)
    store = memory_app.session_interface.store
    client = memory_app.test_client()

    sign_in(client, 'a@x.com', '123456')
    assert len(store) == 1

    cookie = client.get_cookie(memory_app.config['SESSION_COOKIE_NAME'])
    data = store.get(cookie.value)
    assert data['user']['email'] == 'a@x.com'
    assert 'a@x.com' not in cookie.value

    assert client.get('/').status_code == 200


def test_memory_backend_destroys_entry_on_logout(memory_app):
    store = memory_app.session_interface.store
    client = memory_app.test_client()

    sign_in(client, 'a@x.com', '123456')
    client.post('/logout')

    assert len(store) == 0
    assert client.get('/').headers['Location'].endswith('/login')


def test_unknown_backend_is_rejected():
    class BadConfig(TestingConfig):
        SESSION_BACKEND = 'redis'

    with pytest.raises(RuntimeError):
        create_app(BadConfig)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_memory_store_expires_entries():
    clock = FakeClock()
    store = MemorySessionStore(clock=clock)
    store.set('old', {'a': 1}, timedelta(minutes=5))
    clock.now += 60
    store.set('new', {'b': 2}, timedelta(minutes=5))

    clock.now += 250
    assert store.get('old') is None
    assert store.get('new') == {'b': 2}

    clock.now += 100
    store.set('later', {'c': 3}, timedelta(minutes=5))
    assert 'new' not in store
    assert len(store) == 1


def test_expired_sessions_are_evicted_and_not_honoured():
    app = create_app(ExpiredSessionConfig)
    store = app.session_interface.store
    try:
        clients = []
        for i in range(25):
            client = app.test_client()
            sign_in(client, f'user{i}@x.com', '123456')
            clients.append(client)

        assert len(store) == 0
        response = clients[-1].get('/')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/login')
    finally:
        with app.app_context():
            db.session.remove()
            db.drop_all()
