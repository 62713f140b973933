"""
Routes package for the Gaming Hub application
"""
# Export blueprints for registration in app.py
from routes.public import public_bp
from routes.auth import auth_bp
from routes.admin.auth import admin_auth_bp
from routes.admin.dashboard import admin_dashboard_bp

__all__ = [
    'public_bp',
    'auth_bp',
    'admin_auth_bp',
    'admin_dashboard_bp',
]
