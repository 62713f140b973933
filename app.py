"""
Main Flask application entry point for Gaming Hub
"""
import logging
import os
from flask import Flask, request, redirect, url_for
from flask_login import LoginManager
from config import Config
from models import db
from models.user import User
from utils.mail import mail, check_mail_connection
from utils.session_context import get_session_context
from utils.session_store import ServerSideSessionInterface

# Only these GET paths are reachable without a signed-in user
PUBLIC_PATHS = ("/login", "/send-otp")

# Initialize login manager (no DB access at import time)
login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    """Load user for Flask-Login (runs in request context)."""
    return User.query.get(int(user_id))


def create_app(config_class=Config):
    """Application factory pattern. DB init runs inside app_context; non-fatal on failure."""
    config_class.validate()

    app = Flask(__name__)
    app.config.from_object(config_class)
    if not app.debug and not app.testing:
        app.logger.setLevel(logging.INFO)

    db.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)

    backend = app.config.get("SESSION_BACKEND", "cookie")
    if backend == "memory":
        app.session_interface = ServerSideSessionInterface()
    elif backend != "cookie":
        raise RuntimeError(f"Unknown SESSION_BACKEND {backend!r}; use 'cookie' or 'memory'.")

    # Create tables inside app context; do not crash if DB temporarily unavailable
    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning("Database init skipped (non-fatal): %s", e)

    if app.config.get("MAIL_VERIFY_ON_STARTUP"):
        check_mail_connection(app)

    from routes import public_bp, auth_bp, admin_auth_bp, admin_dashboard_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_auth_bp)
    app.register_blueprint(admin_dashboard_bp)

    # Values every template can use
    @app.context_processor
    def inject_session_values():
        ctx = get_session_context()
        return {
            'session_ctx': ctx,
            'is_admin': ctx.is_admin,
            'formspree_url': app.config.get('FORMSPREE_URL', ''),
        }

    # Login compulsion: every GET page except login + OTP routes needs a user
    @app.before_request
    def require_login():
        if request.method != 'GET' or request.endpoint == 'static':
            return None
        if request.path in PUBLIC_PATHS:
            return None
        if not get_session_context().is_authenticated:
            return redirect(url_for('auth.login'))
        return None

    return app


# WSGI entry point: gunicorn -c gunicorn_config.py app:app
app = create_app()
application = app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", app.config.get("PORT", 3000)))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "false").lower() in ("true", "1"))
