"""
Admin dashboard routes
"""
from flask import render_template, Blueprint, current_app
from routes.admin.auth import admin_required
from models.login_log import LoginLog

admin_dashboard_bp = Blueprint('admin_dashboard', __name__)


@admin_dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Login/logout history, newest first"""
    try:
        logs = LoginLog.query.order_by(LoginLog.login_at.desc()).all()
    except Exception as e:
        current_app.logger.error(f"Dashboard error: {str(e)}", exc_info=True)
        return "Error loading dashboard", 500

    open_sessions = sum(1 for log in logs if log.logout_at is None)
    return render_template('dashboard.html', logs=logs, open_sessions=open_sessions)
