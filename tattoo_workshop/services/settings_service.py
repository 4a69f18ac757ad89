# tattoo_workshop/services/settings_service.py
from fastapi import HTTPException, status
from sqlmodel import Session

from tattoo_workshop.core.auth import CurrentUser
from tattoo_workshop.core.email_client import EmailConfig
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.schemas.email import EmailConfigRead, EmailConfigUpdate

EMAIL_PREFIX = "email_"
GEMINI_API_KEY = "gemini_api_key"
SMTP_PASSWORD = f"{EMAIL_PREFIX}smtp_password"

SECRET_KEYS = frozenset({GEMINI_API_KEY, SMTP_PASSWORD})


class SettingsService:
    """
    Business logic over the key/value `settings` table.

    Responsibilities:
      - raw get/set for the generic settings endpoints
      - typed EmailConfig view over the `email_*` keys
      - serializing typed values back to strings on write
    """

    def __init__(self, repo: SettingRepository):
        self.repo = repo

    # ----- Raw values -----

    def get(self, session: Session, key: str) -> str | None:
        row = self.repo.get(session, key)
        return row.value if row else None

    def get_visible(self, session: Session, key: str, current_user: CurrentUser) -> str | None:
        """
        Raw value for the generic settings endpoint.

        Credentials (`SECRET_KEYS`) are readable by admins only.

        Raises:
            HTTPException(403): non-admin asking for a secret key.
        """
        if key in SECRET_KEYS and current_user.role != "admin":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "Insufficient permissions",
                    "required": ["admin"],
                    "current": current_user.role,
                },
            )
        return self.get(session, key)

    def set(self, session: Session, key: str, value: str) -> None:
        self.repo.upsert(session, key, value)

    def get_many(self, session: Session, prefix: str) -> dict[str, str]:
        """All settings whose key starts with `prefix`, as a plain dict."""
        return {row.key: row.value for row in self.repo.list_by_prefix(session, prefix)}

    def get_gemini_api_key(self, session: Session) -> str | None:
        value = self.get(session, GEMINI_API_KEY)
        return value.strip() if value and value.strip() else None

    # ----- Email configuration -----

    def get_email_config(self, session: Session) -> EmailConfig:
        """
        Load `email_*` rows into a typed EmailConfig.

        Keys are stored with the prefix (`email_smtp_host`) and exposed
        without it (`smtp_host`); unknown keys are ignored.
        """
        raw = {
            key[len(EMAIL_PREFIX):]: value
            for key, value in self.get_many(session, EMAIL_PREFIX).items()
        }
        fields = EmailConfig.model_fields
        return EmailConfig(**{k: v for k, v in raw.items() if k in fields})

    def get_email_config_public(self, session: Session) -> EmailConfigRead:
        config = self.get_email_config(session)
        return EmailConfigRead(**config.model_dump(exclude={"smtp_password"}))

    def update_email_config(self, session: Session, payload: EmailConfigUpdate) -> None:
        """
        Store provided fields as strings.

        - Booleans are written as "true"/"false".
        - An empty/None password keeps the stored one.
        """
        values = payload.model_dump(exclude_unset=True)
        if not values.get("smtp_password"):
            values.pop("smtp_password", None)

        for name, value in values.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            self.repo.upsert(session, f"{EMAIL_PREFIX}{name}", str(value), commit=False)
        session.commit()
