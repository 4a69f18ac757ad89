# tattoo_workshop/services/email_templates.py
"""
Default email templates and {{placeholder}} rendering.

Templates are stored in the `email_templates` table so staff can edit
them; the defaults below are only inserted when a name is missing.
"""

import logging
import re
from typing import Any, Mapping

from sqlmodel import Session

from tattoo_workshop.models.email import EmailTemplate
from tattoo_workshop.repositories.email_repo import EmailRepository

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")

MISSING_EMPTY = "empty"
MISSING_ERROR = "error"


class TemplateRenderError(ValueError):
    """A template references variables that were not provided."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing template variables: {', '.join(missing)}")


def render_template(
    text: str,
    variables: Mapping[str, Any],
    missing_policy: str = MISSING_EMPTY,
) -> str:
    """
    Replace every {{name}} token in `text`.

    - Provided values are converted with str(); None renders as "".
    - Tokens with no provided key render as "" under the "empty" policy
      and raise TemplateRenderError under the "error" policy.

    Example:
        render_template("Hi {{name}}", {"name": "Alice"}) == "Hi Alice"
    """
    missing = sorted(
        {m.group(1) for m in PLACEHOLDER_RE.finditer(text) if m.group(1) not in variables}
    )
    if missing and missing_policy == MISSING_ERROR:
        raise TemplateRenderError(missing)

    def substitute(match: re.Match) -> str:
        value = variables.get(match.group(1))
        return "" if value is None else str(value)

    return PLACEHOLDER_RE.sub(substitute, text)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

_LAYOUT = """<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background-color: {color}; color: #fff; padding: 20px; text-align: center;">
      <h1>{title}</h1>
    </div>
    <div style="padding: 20px; background-color: #f7fafc;">
      <p>Dear {{{{customer_name}}}},</p>
      {content}
      <p>Best regards,<br>Tattoo Workshop Team</p>
    </div>
    <p style="text-align: center; font-size: 12px; color: #718096;">
      This is an automated message. Please do not reply to this email.
    </p>
  </div>
</body>
</html>
"""


def _layout(title: str, color: str, content: str) -> str:
    return _LAYOUT.format(title=title, color=color, content=content)


DEFAULT_TEMPLATES: list[dict[str, str]] = [
    {
        "name": "appointment_confirmation",
        "subject": "Appointment Confirmation - {{appointment_date}}",
        "body": _layout(
            "Appointment Confirmed",
            "#4a5568",
            "<p>Your tattoo appointment has been confirmed.</p>"
            "<p><strong>Date:</strong> {{appointment_date}}<br>"
            "<strong>Time:</strong> {{appointment_time}}<br>"
            "<strong>Artist:</strong> {{artist_name}}<br>"
            "<strong>Duration:</strong> {{duration}} minutes<br>"
            "<strong>Notes:</strong> {{notes}}</p>"
            "<p>If you need to make any changes, please contact us as soon as possible.</p>",
        ),
        "description": "Sent when a new appointment is created",
    },
    {
        "name": "appointment_reminder",
        "subject": "Reminder: Appointment in {{reminder_period}}",
        "body": _layout(
            "Appointment Reminder",
            "#4299e1",
            "<p>Your tattoo appointment is coming up in {{reminder_period}}.</p>"
            "<p><strong>Date:</strong> {{appointment_date}}<br>"
            "<strong>Time:</strong> {{appointment_time}}<br>"
            "<strong>Artist:</strong> {{artist_name}}<br>"
            "<strong>Duration:</strong> {{duration}} minutes</p>"
            "<p>Please arrive 10 minutes early.</p>",
        ),
        "description": "Sent as a reminder before appointments",
    },
    {
        "name": "appointment_cancellation",
        "subject": "Appointment Cancelled - {{appointment_date}}",
        "body": _layout(
            "Appointment Cancelled",
            "#f56565",
            "<p>Your appointment has been cancelled.</p>"
            "<p><strong>Date:</strong> {{appointment_date}}<br>"
            "<strong>Time:</strong> {{appointment_time}}<br>"
            "<strong>Artist:</strong> {{artist_name}}</p>"
            "<p>If you would like to book a new date, please contact us.</p>",
        ),
        "description": "Sent when an appointment is cancelled",
    },
    {
        "name": "appointment_rescheduled",
        "subject": "Appointment Rescheduled - New Date: {{new_appointment_date}}",
        "body": _layout(
            "Appointment Rescheduled",
            "#ed8936",
            "<p>Your appointment has been moved to a new date and time.</p>"
            "<p><strong>Previous:</strong> {{old_appointment_date}} at {{old_appointment_time}}<br>"
            "<strong>New:</strong> {{new_appointment_date}} at {{new_appointment_time}}<br>"
            "<strong>Artist:</strong> {{artist_name}}</p>",
        ),
        "description": "Sent when an appointment is rescheduled",
    },
]


def seed_default_templates(session: Session, repo: EmailRepository | None = None) -> int:
    """
    Insert any default template whose name is not in the table yet.
    Existing (possibly edited) templates are left alone.

    Returns:
        Number of templates inserted.
    """
    repo = repo or EmailRepository()
    inserted = 0
    for data in DEFAULT_TEMPLATES:
        if repo.get_template(session, data["name"]) is None:
            repo.save_template(session, EmailTemplate(**data))
            inserted += 1
    if inserted:
        logger.info(f"Seeded {inserted} default email template(s)")
    return inserted
