"""
Shared fixtures: an app on in-memory SQLite and helpers for the OTP login flow.
"""
import os
import sys
from unittest.mock import patch

import pytest

# Project root holds app.py / config.py as top-level modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from config import TestingConfig
from models import db as _db


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def request_code(client, email, code='123456'):
    with patch('utils.otp_helper.generate_otp', return_value=code):
        return client.post('/send-otp', data={'email': email})


def sign_in(client, email='a@x.com', code='123456'):
    request_code(client, email, code)
    return client.post('/login', data={'email': email, 'otp': code})


@pytest.fixture
def signed_in_client(client):
    response = sign_in(client)
    assert response.status_code == 302
    return client
