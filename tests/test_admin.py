from datetime import datetime, timedelta
from unittest.mock import patch

from models import db
from models.login_log import LoginLog
from tests.conftest import sign_in


def test_dashboard_requires_admin_flag(signed_in_client):
    response = signed_in_client.get('/dashboard')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/admin-login')


def test_admin_login_form_renders(signed_in_client):
    response = signed_in_client.get('/admin-login')
    assert response.status_code == 200
    assert b'Admin login' in response.data


def test_admin_login_requires_password(signed_in_client):
    response = signed_in_client.post('/admin-login', data={})
    assert response.status_code == 200
    assert b'Password is required' in response.data


def test_admin_login_rejects_wrong_password(signed_in_client):
    response = signed_in_client.post('/admin-login', data={'password': 'nope'})
    assert response.status_code == 200
    assert b'Incorrect password' in response.data
    assert signed_in_client.get('/dashboard').headers['Location'].endswith('/admin-login')


def test_unset_admin_password_never_matches(app, signed_in_client):
    app.config['ADMIN_PASSWORD'] = None
    response = signed_in_client.post('/admin-login', data={'password': 'letmein'})
    assert b'Incorrect password' in response.data


def test_dashboard_lists_logs_newest_first(app, signed_in_client):
    now = datetime.utcnow()
    with app.app_context():
        db.session.add(LoginLog(email='old@x.com', login_at=now - timedelta(days=2),
                                logout_at=now - timedelta(days=2) + timedelta(hours=1)))
        db.session.add(LoginLog(email='mid@x.com', login_at=now - timedelta(days=1)))
        db.session.commit()

    response = signed_in_client.post('/admin-login', data={'password': 'letmein'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/dashboard')

    response = signed_in_client.get('/dashboard')
    assert response.status_code == 200
    body = response.data.decode()
    assert '3 sessions, 2 still open.' in body
    rows = body.split('<tbody>')[1]
    # a@x.com is the fixture's own login, the most recent one
    assert rows.index('a@x.com') < rows.index('mid@x.com') < rows.index('old@x.com')


def test_admin_flag_is_dropped_on_logout(signed_in_client):
    signed_in_client.post('/admin-login', data={'password': 'letmein'})
    signed_in_client.post('/logout')

    response = signed_in_client.get('/dashboard')
    assert response.headers['Location'].endswith('/login')


def test_dashboard_store_failure_returns_500(signed_in_client):
    signed_in_client.post('/admin-login', data={'password': 'letmein'})
    with patch('routes.admin.dashboard.LoginLog') as log_model:
        log_model.query.order_by.side_effect = RuntimeError('db gone')
        response = signed_in_client.get('/dashboard')

    assert response.status_code == 500
    assert response.data == b'Error loading dashboard'


def test_anonymous_admin_login_is_not_granted(app):
    client = app.test_client()
    response = client.post('/admin-login', data={'password': 'letmein'})
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')

    sign_in(client)
    response = client.get('/dashboard')
    assert response.headers['Location'].endswith('/admin-login')
