"""
Email utility functions
"""
from flask_mail import Mail, Message
from flask import current_app

from utils.otp_helper import OTP_EXPIRY_MINUTES

mail = Mail()


def send_email(subject, recipients, body, html=None):
    """
    Send an email

    Args:
        subject: Email subject
        recipients: List of recipient email addresses
        body: Plain text body
        html: HTML body (optional)
    """
    msg = Message(
        subject=subject,
        recipients=recipients,
        body=body,
        html=html
    )
    mail.send(msg)


def send_login_otp_email(email: str, otp: str) -> None:
    """
    Send the login code. Subject: "Your Gaming Hub OTP".
    Raises on SMTP failure; the caller decides whether that matters.
    """
    subject = "Your Gaming Hub OTP"
    body = f"Your OTP is: {otp}\nValid for {OTP_EXPIRY_MINUTES} minutes."
    try:
        send_email(subject, [email], body, html=_otp_email_html(otp))
    except Exception as e:
        current_app.logger.error(f"SMTP error sending OTP email to {email}: {str(e)}", exc_info=True)
        raise


def check_mail_connection(app):
    """Open one SMTP connection at startup and log whether mail is usable."""
    with app.app_context():
        try:
            with mail.connect():
                pass
            app.logger.info("Mailer is ready to send emails (%s)", app.config.get("MAIL_SERVER"))
            return True
        except Exception as e:
            app.logger.error("Mailer error: %s", e)
            return False


def _otp_email_html(otp: str) -> str:
    """Clean HTML template for OTP email."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>Your Gaming Hub OTP</title></head>
    <body style="font-family: system-ui, sans-serif; max-width: 480px; margin: 0 auto; padding: 24px;">
        <h2 style="color: #1a1a2e;">Sign in to Gaming Hub</h2>
        <p>Use the code below to sign in:</p>
        <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px; color: #16213e;">{otp}</p>
        <p style="color: #666;">This code expires in {OTP_EXPIRY_MINUTES} minutes. Do not share it with anyone.</p>
        <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;">
        <p style="font-size: 12px; color: #999;">If you did not request this, you can ignore this email.</p>
    </body>
    </html>
    """
