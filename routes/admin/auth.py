"""
Admin authentication routes
"""
import hmac
from functools import wraps

from flask import render_template, request, redirect, url_for, Blueprint, current_app
from utils.session_context import get_session_context

admin_auth_bp = Blueprint('admin_auth', __name__)


def admin_required(f):
    """Decorator to require the admin flag in the session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_session_context().is_admin:
            return redirect(url_for('admin_auth.login'))
        return f(*args, **kwargs)
    return decorated_function


def check_admin_password(password):
    """Plaintext comparison against ADMIN_PASSWORD; an unset password never matches."""
    expected = current_app.config.get('ADMIN_PASSWORD')
    if not expected or not password:
        return False
    return hmac.compare_digest(password.encode('utf-8'), expected.encode('utf-8'))


@admin_auth_bp.route('/admin-login', methods=['GET', 'POST'])
def login():
    """Admin login (the user must already be signed in by OTP to see the form)"""
    if request.method == 'POST':
        password = request.form.get('password', '')

        if not password:
            return render_template('admin_login.html', error='Password is required')

        ctx = get_session_context()
        # Admin access is layered on an OTP sign-in, never granted to anonymous sessions
        if not ctx.is_authenticated:
            return redirect(url_for('auth.login'))

        if check_admin_password(password):
            ctx.grant_admin()
            current_app.logger.info("Admin access granted to %s", ctx.email)
            return redirect(url_for('admin_dashboard.dashboard'))

        current_app.logger.warning("Failed admin login attempt from %s", request.remote_addr)
        return render_template('admin_login.html', error='Incorrect password')

    return render_template('admin_login.html', error=None)
