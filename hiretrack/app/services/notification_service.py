"""
Notification service - transactional email over SMTP.
HTML bodies are rendered from Jinja2 templates under templates/email/.
When SMTP_HOST is not configured, messages are logged instead of sent (development).
"""
import smtplib
from datetime import datetime
from email.message import EmailMessage
from email.utils import make_msgid

from jinja2 import Environment, FileSystemLoader, select_autoescape

from hiretrack.app.core.config import EMAIL_TEMPLATE_DIR, settings
from hiretrack.app.core.exceptions import DeliveryFailure
from hiretrack.app.core.logging_config import get_logger

logger = get_logger("services.notifications")

_env = Environment(
    loader=FileSystemLoader(str(EMAIL_TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render_template(name: str, **context) -> str:
    """Render an email template. Returns HTML string."""
    template = _env.get_template(name)
    return template.render(app_name=settings.app_name, **context)


class EmailSender:
    """SMTP transport. send() returns {success, messageId} or raises DeliveryFailure."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user: str | None = None,
        password: str | None = None,
        use_tls: bool | None = None,
        from_addr: str | None = None,
    ):
        self.host = settings.smtp_host if host is None else host
        self.port = port or settings.smtp_port
        self.user = settings.smtp_user if user is None else user
        self.password = settings.smtp_password if password is None else password
        self.use_tls = settings.smtp_use_tls if use_tls is None else use_tls
        self.from_addr = from_addr or settings.email_from

    def build_message(self, to: str, subject: str, body_html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.from_addr
        msg["To"] = to
        msg["Subject"] = subject
        msg["Message-ID"] = make_msgid(domain="hiretrack")
        msg.set_content("This message requires an HTML-capable email client.")
        msg.add_alternative(body_html, subtype="html")
        return msg

    def send(self, to: str, subject: str, body_html: str) -> dict:
        if not to:
            raise DeliveryFailure("Recipient address is empty")
        msg = self.build_message(to, subject, body_html)
        message_id = msg["Message-ID"]

        if not self.host:
            logger.info(
                "SMTP not configured - email logged only to=%s subject=%s message_id=%s",
                to,
                subject,
                message_id,
            )
            return {"success": True, "messageId": message_id}

        try:
            with smtplib.SMTP(self.host, self.port, timeout=settings.smtp_timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.user and self.password:
                    server.login(self.user, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "Email send failed host=%s to=%s subject=%s error=%s",
                self.host,
                to,
                subject,
                e,
            )
            raise DeliveryFailure(f"Failed to send email: {e}") from e

        logger.info("Email sent to=%s message_id=%s", to, message_id)
        return {"success": True, "messageId": message_id}


_default_sender: EmailSender | None = None


def get_email_sender() -> EmailSender:
    """Process-wide sender built from settings."""
    global _default_sender
    if _default_sender is None:
        _default_sender = EmailSender()
    return _default_sender


def _format_date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M UTC")
    return str(value or "")


def send_reminder_email(to: str, data: dict, sender: EmailSender | None = None) -> dict:
    """
    Send a single-reminder alert.

    data keys: title, description, reminder_date, application_title, application_id
    """
    html = render_template(
        "reminder.html",
        title=data.get("title", ""),
        description=data.get("description") or "",
        reminder_date=_format_date(data.get("reminder_date")),
        application_title=data.get("application_title", ""),
        link=f"{settings.frontend_url}/applications/{data.get('application_id', '')}",
    )
    return (sender or get_email_sender()).send(to, f"Reminder: {data.get('title', '')}", html)


def send_weekly_summary(to: str, data: dict, sender: EmailSender | None = None) -> dict:
    """
    Send the weekly application digest.

    data keys: user_name, total, new_this_week, interviews, offers
    """
    html = render_template(
        "weekly_summary.html",
        user_name=data.get("user_name", ""),
        total=data.get("total", 0),
        new_this_week=data.get("new_this_week", 0),
        interviews=data.get("interviews", 0),
        offers=data.get("offers", 0),
        link=f"{settings.frontend_url}/analytics",
    )
    return (sender or get_email_sender()).send(to, "Your Weekly Application Summary", html)
