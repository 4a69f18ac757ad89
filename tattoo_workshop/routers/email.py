# tattoo_workshop/routers/email.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from tattoo_workshop.core.auth import get_current_user, require_admin
from tattoo_workshop.database import get_session
from tattoo_workshop.models.email import EmailTemplate
from tattoo_workshop.repositories.email_repo import EmailRepository
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.schemas.email import (
    EmailConfigRead,
    EmailConfigUpdate,
    EmailNotificationRead,
    EmailResultRead,
    EmailTemplateRead,
    EmailTemplateUpdate,
    EmailTestRequest,
)
from tattoo_workshop.services.email_service import EmailService
from tattoo_workshop.services.notification_queue import get_email_service
from tattoo_workshop.services.settings_service import SettingsService

router = APIRouter(prefix="/email", tags=["Email"])

repo = EmailRepository()
settings_service = SettingsService(SettingRepository())


# -------- Configuration --------


@router.get(
    "/config",
    response_model=EmailConfigRead,
    dependencies=[Depends(require_admin)],
)
def get_email_config(session: Session = Depends(get_session)):
    """Current SMTP settings; the password is never returned."""
    return settings_service.get_email_config_public(session)


@router.post("/config", dependencies=[Depends(require_admin)])
def update_email_config(
    payload: EmailConfigUpdate,
    session: Session = Depends(get_session),
):
    """
    Store the provided email settings.

    Leave `smtp_password` empty to keep the stored one.
    """
    settings_service.update_email_config(session, payload)
    return {"success": True, "message": "Email settings saved successfully"}


@router.post(
    "/test",
    response_model=EmailResultRead,
    dependencies=[Depends(require_admin)],
)
def send_test_email(
    payload: EmailTestRequest,
    session: Session = Depends(get_session),
    email_service: EmailService = Depends(get_email_service),
):
    if not payload.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email address is required",
        )
    result = email_service.send_test_email(session, payload.email)
    return EmailResultRead(
        success=result.success,
        message=result.message or "Test email sent successfully",
    )


# -------- Templates --------


def _get_template_or_404(session: Session, name: str) -> EmailTemplate:
    template = repo.get_template(session, name)
    if not template:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Template not found",
        )
    return template


@router.get(
    "/templates",
    response_model=list[EmailTemplateRead],
    dependencies=[Depends(get_current_user)],
)
def list_templates(session: Session = Depends(get_session)):
    return repo.list_templates(session)


@router.get(
    "/templates/{name}",
    response_model=EmailTemplateRead,
    dependencies=[Depends(get_current_user)],
)
def get_template(name: str, session: Session = Depends(get_session)):
    return _get_template_or_404(session, name)


@router.put(
    "/templates/{name}",
    response_model=EmailTemplateRead,
    dependencies=[Depends(require_admin)],
)
def update_template(
    name: str,
    payload: EmailTemplateUpdate,
    session: Session = Depends(get_session),
):
    template = _get_template_or_404(session, name)
    template.subject = payload.subject
    template.body = payload.body
    template.updated_at = datetime.now(timezone.utc)
    return repo.save_template(session, template)


# -------- Notification log --------


@router.get(
    "/notifications",
    response_model=list[EmailNotificationRead],
    dependencies=[Depends(get_current_user)],
)
def list_notifications(session: Session = Depends(get_session)):
    """Latest 100 sent notifications with the customer's name and email."""
    return [
        EmailNotificationRead(
            **notification.model_dump(),
            customer_name=customer.name,
            customer_email=customer.email,
        )
        for notification, customer in repo.list_notifications(session, limit=100)
    ]
