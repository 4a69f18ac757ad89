# tattoo_workshop/repositories/email_repo.py
from sqlmodel import Session, select

from tattoo_workshop.models.customer import Customer
from tattoo_workshop.models.email import EmailNotification, EmailTemplate


class EmailRepository:
    """
    Data access layer for email templates and the notification log.
    """

    # ----- Templates -----

    def get_template(self, session: Session, name: str) -> EmailTemplate | None:
        stmt = select(EmailTemplate).where(EmailTemplate.name == name)
        return session.exec(stmt).first()

    def list_templates(self, session: Session) -> list[EmailTemplate]:
        stmt = select(EmailTemplate).order_by(EmailTemplate.name)
        return list(session.exec(stmt).all())

    def save_template(self, session: Session, template: EmailTemplate) -> EmailTemplate:
        session.add(template)
        session.commit()
        session.refresh(template)
        return template

    # ----- Notification log -----

    def add_notification(
        self,
        session: Session,
        notification: EmailNotification,
    ) -> EmailNotification:
        session.add(notification)
        session.commit()
        session.refresh(notification)
        return notification

    def list_notifications(
        self,
        session: Session,
        limit: int = 100,
    ) -> list[tuple[EmailNotification, Customer]]:
        """Latest N log rows joined with the customer."""
        stmt = (
            select(EmailNotification, Customer)
            .join(Customer, Customer.id == EmailNotification.customer_id)
            .order_by(EmailNotification.created_at.desc(), EmailNotification.id.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_for_appointment(
        self,
        session: Session,
        appointment_id: int,
        notification_type: str | None = None,
    ) -> list[EmailNotification]:
        stmt = select(EmailNotification).where(
            EmailNotification.appointment_id == appointment_id
        )
        if notification_type is not None:
            stmt = stmt.where(EmailNotification.type == notification_type)
        return list(session.exec(stmt).all())
