"""Outgoing mail.

Messages are rendered from the Jinja2 templates in ``recipe_manager/templates/email``
(one ``.txt.j2`` and one ``.html.j2`` per message kind) and sent over SMTP.
"""

import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from recipe_manager.core.config.config import get_settings
from recipe_manager.core.logging import get_logger
from recipe_manager.exceptions.custom_exceptions import UnableToSendEmailError

_log = get_logger(__name__)
settings = get_settings()

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "email"

CONFIRMATION = "confirmation"
RESET = "reset"
NOTIFICATION = "notification"

_DEFAULT_SUBJECTS = {
    CONFIRMATION: "Confirm your account",
    RESET: "Password reset",
    NOTIFICATION: "New recipes",
}

_environment = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(enabled_extensions=("html.j2",)),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class Mail:
    to: str
    subject: str
    text: str
    html: str


def render_mail(kind: str, to: str, **context: Any) -> Mail:
    """Render the text and HTML bodies of a message.

    The template context always contains ``links`` (frontend URLs from the mail
    configuration) in addition to ``context``.

    Args:
        kind: Template name, one of ``confirmation``, ``reset``, ``notification``.
        to: Recipient address.
        **context: Values used by the template.

    Returns:
        Mail: The rendered message.
    """
    values = {"links": settings.mail_links, **context}
    subject = settings.mail_subjects.get(kind, _DEFAULT_SUBJECTS[kind])
    return Mail(
        to=to,
        subject=subject,
        text=_environment.get_template(f"{kind}.txt.j2").render(values),
        html=_environment.get_template(f"{kind}.html.j2").render(values),
    )


def _build_message(mail: Mail) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.email_from
    message["To"] = mail.to
    message["Subject"] = mail.subject
    message.set_content(mail.text)
    message.add_alternative(mail.html, subtype="html")
    return message


def send_mail(mail: Mail) -> None:
    """Send a rendered message through the configured SMTP server.

    Raises:
        UnableToSendEmailError: If the server refuses the recipient or the
            connection fails.
    """
    smtp_class = smtplib.SMTP_SSL if settings.email_secure else smtplib.SMTP
    try:
        with smtp_class(settings.email_host, settings.email_port, timeout=30) as smtp:
            if not settings.email_secure:
                smtp.ehlo()
                # Plain relays and local catchers do not offer STARTTLS
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if settings.email_user and settings.email_pass:
                smtp.login(settings.email_user, settings.email_pass)
            refused = smtp.send_message(_build_message(mail))
    except (smtplib.SMTPException, OSError) as e:
        _log.error("Sending '{}' to {} failed: {}", mail.subject, mail.to, str(e))
        raise UnableToSendEmailError([mail.to]) from e

    if refused:
        _log.error("Mail server refused recipients {}", list(refused))
        raise UnableToSendEmailError(list(refused))
    _log.info("Sent '{}' to {}", mail.subject, mail.to)
