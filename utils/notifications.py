"""
Notifications Module - Contact form notifications via Email and Telegram
"""

import smtplib
import requests
import threading
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from markupsafe import escape
from flask import current_app


def get_admin_notifications_config():
    """Load admin notification settings from the app config"""
    return {
        'telegram': {
            'bot_token': current_app.config.get('ADMIN_TELEGRAM_BOT_TOKEN') or '',
            'chat_id': current_app.config.get('ADMIN_TELEGRAM_CHAT_ID') or ''
        },
        'smtp': {
            'host': current_app.config.get('ADMIN_SMTP_HOST') or '',
            'port': current_app.config.get('ADMIN_SMTP_PORT') or '587',
            'email': current_app.config.get('ADMIN_SMTP_EMAIL') or '',
            'password': current_app.config.get('ADMIN_SMTP_PASSWORD') or ''
        }
    }


def build_contact_email(name, email, message):
    """
    Build subject and HTML body for a contact notification

    Returns:
        tuple: (subject, html_body)
    """
    subject = f"New Contact Message from {name}"
    body = str(escape(message)).replace('\n', '<br>')
    html_body = (
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {escape(name)}</p>"
        f"<p><strong>Email:</strong> {escape(email)}</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{body}</p>"
        "<hr>"
        '<p style="color: #666; font-size: 12px;">This message was sent from your portfolio contact form.</p>'
    )
    return subject, html_body


def send_email(smtp_cfg, recipient, subject, html_body):
    """
    Send an HTML email over SMTP with STARTTLS

    Args:
        smtp_cfg (dict): host, port, email, password
        recipient (str): Email recipient
        subject (str): Email subject
        html_body (str): HTML body

    Raises:
        smtplib.SMTPException, OSError: On delivery failure
    """
    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = smtp_cfg['email']
    msg['To'] = recipient
    msg.attach(MIMEText(html_body, 'html'))

    with smtplib.SMTP(smtp_cfg['host'], int(smtp_cfg.get('port') or 587)) as server:
        server.starttls()
        server.login(smtp_cfg['email'], smtp_cfg['password'])
        server.send_message(msg)


def send_telegram_message(bot_token, chat_id, text):
    """Send a Telegram message, returns True on HTTP 200"""
    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
    payload = {
        'chat_id': chat_id,
        'text': text,
        'parse_mode': 'HTML'
    }
    response = requests.post(url, json=payload, timeout=10)
    return response.status_code == 200


def send_contact_notification(recipient, name, email, message):
    """
    Notify the portfolio owner about a new contact message

    Delivery runs on background threads; failures are logged and never
    reach the visitor.

    Args:
        recipient (str | None): Owner address, email is skipped when None
        name (str): Sender name
        email (str): Sender email
        message (str): Message text

    Returns:
        list: Names of the channels a delivery was started on
    """
    app = current_app._get_current_object()
    config = get_admin_notifications_config()
    started = []

    smtp_cfg = config['smtp']
    if recipient and all([smtp_cfg.get('host'), smtp_cfg.get('email'), smtp_cfg.get('password')]):
        subject, html_body = build_contact_email(name, email, message)

        def _send_mail():
            try:
                send_email(smtp_cfg, recipient, subject, html_body)
                app.logger.info(f"Contact notification email sent to {recipient}")
            except Exception as e:
                app.logger.error(f"Contact notification email error: {str(e)}")

        threading.Thread(target=_send_mail, daemon=True).start()
        started.append('email')
    elif not recipient:
        app.logger.info("No admin email configured, skipping email notification")
    else:
        app.logger.debug("Admin SMTP credentials not configured")

    tg_token = config['telegram']['bot_token']
    tg_chat = config['telegram']['chat_id']
    if tg_token and tg_chat:
        text = (
            f"📧 <b>New Portfolio Message</b>\n\n"
            f"👤 <b>From:</b> {escape(name)}\n"
            f"📧 <b>Email:</b> {escape(email)}\n"
            f"💬 <b>Message:</b>\n{escape(message[:200])}{'...' if len(message) > 200 else ''}"
        )

        def _send_telegram():
            try:
                if send_telegram_message(tg_token, tg_chat, text):
                    app.logger.info("Contact Telegram notification sent")
                else:
                    app.logger.error("Telegram API rejected contact notification")
            except requests.RequestException as e:
                app.logger.error(f"Contact Telegram notification error: {str(e)}")

        threading.Thread(target=_send_telegram, daemon=True).start()
        started.append('telegram')

    return started
