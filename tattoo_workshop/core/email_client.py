# tattoo_workshop/core/email_client.py
"""
SMTP client utilities for the studio backend.

Responsibilities:
  - Describe the studio's email configuration as a typed model.
  - Provide a single send_email(...) function for services to use.
  - Support both implicit SSL and STARTTLS connections.

The configuration is edited by admins at runtime and stored in the
`settings` table under `email_*` keys (see services/settings_service.py),
so a fresh connection is built from it on every send. Typical values
(Gmail with an App Password):

    email_enabled=true
    email_smtp_host=smtp.gmail.com
    email_smtp_port=465
    email_smtp_secure=true
    email_smtp_user=studio@gmail.com
    email_smtp_password=<app password>
    email_from_address=studio@gmail.com
    email_from_name=Tattoo Workshop
    email_reminders_enabled=true
"""

import smtplib
from email.message import EmailMessage

from pydantic import BaseModel, field_validator

SMTP_TIMEOUT_SECONDS = 30

TRUTHY = {"1", "true", "yes", "y", "on"}


def parse_bool(raw: str | bool | None, default: bool = False) -> bool:
    """
    Parse a stored flag.

    Accepted truthy values (case-insensitive):
      - "1", "true", "yes", "y", "on"

    Everything else is treated as False; None gives `default`.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return raw.strip().lower() in TRUTHY


class EmailConfig(BaseModel):
    """
    Typed view of the `email_*` settings with explicit defaults.

    Validation happens at load time: a non-numeric port falls back to
    587 instead of failing deep inside smtplib.
    """

    enabled: bool = False
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: str | None = None
    smtp_password: str | None = None
    from_address: str | None = None
    from_name: str = "Tattoo Workshop"
    reminders_enabled: bool = False

    @field_validator("enabled", "smtp_secure", "reminders_enabled", mode="before")
    @classmethod
    def parse_flag(cls, v):
        return parse_bool(v)

    @field_validator("smtp_port", mode="before")
    @classmethod
    def parse_port(cls, v):
        if v in (None, ""):
            return 587
        try:
            port = int(v)
        except (TypeError, ValueError):
            return 587
        return port if 0 < port < 65536 else 587

    @field_validator("smtp_host", "smtp_user", "smtp_password", "from_address", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("from_name", mode="before")
    @classmethod
    def default_from_name(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "Tattoo Workshop"
        return v

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host)

    @property
    def from_header(self) -> str:
        address = self.from_address or self.smtp_user or ""
        return f'"{self.from_name}" <{address}>'


def _create_smtp_client(config: EmailConfig) -> smtplib.SMTP:
    """
    Create and return an SMTP client for `config`.

    Priority:
      - smtp_secure → smtplib.SMTP_SSL (implicit TLS, commonly port 465).
      - else → smtplib.SMTP, upgraded with STARTTLS when the server
        offers it (commonly port 587).
    """
    if not config.smtp_host:
        raise RuntimeError("SMTP host is not configured.")

    if config.smtp_secure:
        server: smtplib.SMTP = smtplib.SMTP_SSL(
            config.smtp_host, config.smtp_port, timeout=SMTP_TIMEOUT_SECONDS
        )
    else:
        server = smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls()
            server.ehlo()

    return server


def send_email(
    config: EmailConfig,
    to_email: str,
    subject: str,
    html_body: str,
    text_body: str | None = None,
) -> None:
    """
    Send an HTML email to a single recipient.

    Parameters
    ----------
    config:
        Studio email configuration (a new connection is opened per call).
    to_email:
        Recipient email address.
    subject:
        Email subject line.
    html_body:
        HTML body (the stored templates are HTML).
    text_body:
        Optional plain-text fallback.

    Raises
    ------
    RuntimeError:
        If the SMTP host is missing.
    smtplib.SMTPException / OSError:
        If the underlying SMTP connection or send fails.
    """
    msg = EmailMessage()
    msg["From"] = config.from_header
    msg["To"] = to_email
    msg["Subject"] = subject

    msg.set_content(text_body or "This message requires an HTML capable email client.")
    msg.add_alternative(html_body, subtype="html")

    server = _create_smtp_client(config)
    try:
        if config.smtp_user and config.smtp_password:
            server.login(config.smtp_user, config.smtp_password)
        server.send_message(msg)
    finally:
        try:
            server.quit()
        except (smtplib.SMTPException, OSError):
            # Connection is being torn down anyway.
            pass
