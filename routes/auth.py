"""
Authentication routes: email OTP login and logout
"""
from datetime import datetime

from flask import render_template, request, redirect, url_for, Blueprint, current_app
from models import db
from models.user import User
from models.login_log import LoginLog
from utils.otp_helper import issue_otp, consume_otp, OTPError
from utils.mail import send_login_otp_email
from utils.session_context import get_session_context

auth_bp = Blueprint('auth', __name__)

EMAIL_REQUIRED_MSG = "Email is required."
EMAIL_AND_OTP_REQUIRED_MSG = "Email and OTP are required."
OTP_VERIFY_ERROR_MSG = "Error while verifying OTP."


@auth_bp.route('/login', methods=['GET'])
def login():
    """Login page: request a code, then submit it"""
    if get_session_context().is_authenticated:
        return redirect(url_for('public.home'))
    return render_template('login.html')


@auth_bp.route('/send-otp', methods=['POST'])
def send_otp():
    """Issue a login code and email it. Delivery problems never fail the request."""
    email = request.form.get('email', '')
    if not email:
        return EMAIL_REQUIRED_MSG

    try:
        row = issue_otp(email)
        send_login_otp_email(email, row.code)
        current_app.logger.info("Login code sent to %s", email)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error sending OTP to {email}: {str(e)}", exc_info=True)

    return redirect(url_for('auth.login'))


@auth_bp.route('/login', methods=['POST'])
def verify_login():
    """Verify the submitted code and sign the user in"""
    email = request.form.get('email', '')
    otp = request.form.get('otp', '')
    if not email or not otp:
        return EMAIL_AND_OTP_REQUIRED_MSG

    ctx = get_session_context()
    try:
        consume_otp(email, otp)

        user = User.find_or_create(email)
        log = LoginLog(email=user.email, login_at=datetime.utcnow())
        db.session.add(log)
        db.session.commit()

        ctx.sign_in(user, log)
        current_app.logger.info("User %s signed in (log %s)", user.email, log.id)
        return redirect(url_for('public.home'))
    except OTPError as e:
        return e.message
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Login error for {email}: {str(e)}", exc_info=True)
        return OTP_VERIFY_ERROR_MSG


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Close this session's login log, then destroy the session"""
    ctx = get_session_context()
    if ctx.login_log_id is not None:
        try:
            log = LoginLog.query.get(ctx.login_log_id)
            if log:
                log.close()
                db.session.commit()
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error updating logout time: {str(e)}", exc_info=True)

    current_app.logger.info("User %s signed out", ctx.email)
    ctx.destroy()
    return redirect(url_for('public.home'))
