"""
Notifications Module - Outbound contact messages over SMTP and Telegram
"""

import smtplib
import requests
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr
from flask import current_app
from markupsafe import escape
from .errors import NotificationError


def get_smtp_config():
    """SMTP settings from the app configuration"""
    return {
        'host': current_app.config.get('SMTP_HOST') or '',
        'port': current_app.config.get('SMTP_PORT') or '587',
        'email': current_app.config.get('SMTP_EMAIL') or '',
        'password': current_app.config.get('SMTP_PASSWORD') or '',
    }


def get_telegram_credentials():
    """Return (bot_token, chat_id) or (None, None) when not configured"""
    bot_token = current_app.config.get('TELEGRAM_BOT_TOKEN')
    chat_id = current_app.config.get('TELEGRAM_CHAT_ID')
    if bot_token and chat_id:
        return bot_token, chat_id
    return None, None


def send_email(recipient, subject, body, reply_to=None):
    """
    Send a plain-text email using the configured SMTP account

    Raises:
        NotificationError: SMTP is not configured or the server refused the message
    """
    smtp_config = get_smtp_config()
    if not all([smtp_config['host'], smtp_config['email'], smtp_config['password']]):
        raise NotificationError("SMTP is not configured")

    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = smtp_config['email']
    msg['To'] = recipient
    if reply_to:
        msg['Reply-To'] = reply_to
    msg.attach(MIMEText(body, 'plain', 'utf-8'))

    try:
        with smtplib.SMTP(smtp_config['host'], int(smtp_config['port']), timeout=10) as server:
            server.starttls()
            server.login(smtp_config['email'], smtp_config['password'])
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        raise NotificationError(f"Error sending email to {recipient}: {str(e)}") from e

    current_app.logger.info(f"Email sent to {recipient}")


def send_telegram_notification(message_text):
    """Send a Telegram message with the configured bot; returns True on success"""
    bot_token, chat_id = get_telegram_credentials()
    if not (bot_token and chat_id):
        current_app.logger.debug("Telegram credentials not configured")
        return False

    try:
        url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        payload = {
            'chat_id': chat_id,
            'text': message_text,
            'parse_mode': 'HTML'
        }
        response = requests.post(url, json=payload, timeout=10)
        if response.status_code == 200:
            current_app.logger.info("Telegram notification sent")
            return True
        current_app.logger.error(f"Telegram API error: {response.status_code}")
        return False
    except requests.exceptions.RequestException as e:
        current_app.logger.error(f"Telegram notification error: {str(e)}")
        return False


def send_contact_message(recipient, name, email, message):
    """
    Deliver a contact-form message to the site owner

    Args:
        recipient (str): owner address the message is sent to
        name (str): sender name
        email (str): sender email, used as Reply-To
        message (str): message body

    Returns:
        bool: True if at least one channel delivered the message
    """
    delivered = False

    if recipient:
        try:
            send_email(
                recipient=recipient,
                subject=f"New portfolio message from {name}",
                body=f"From: {formataddr((name, email))}\n\n{message}",
                reply_to=email,
            )
            delivered = True
        except NotificationError as e:
            current_app.logger.error(f"Contact email failed: {e.message}")
    else:
        current_app.logger.warning("CONTACT_RECIPIENT is not configured; skipping email")

    preview = message[:200] + ('...' if len(message) > 200 else '')
    if send_telegram_notification(
            f"📧 <b>New Portfolio Message</b>\n\n"
            f"👤 <b>From:</b> {escape(name)}\n"
            f"📧 <b>Email:</b> {escape(email)}\n"
            f"💬 <b>Message:</b>\n{escape(preview)}"):
        delivered = True

    return delivered


__all__ = [
    'get_smtp_config',
    'get_telegram_credentials',
    'send_email',
    'send_telegram_notification',
    'send_contact_message',
]
