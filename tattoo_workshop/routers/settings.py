# tattoo_workshop/routers/settings.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from tattoo_workshop.core.auth import CurrentUser, get_current_user, require_admin
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.setting_repo import SettingRepository
from tattoo_workshop.schemas.setting import SettingValue, SettingWrite
from tattoo_workshop.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["Settings"])

repo = SettingRepository()
service = SettingsService(repo)


@router.get("/{key}", response_model=SettingValue)
def get_setting(
    key: str,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Raw value for `key`; `{"value": null}` when unset. Credentials are admin only."""
    return SettingValue(value=service.get_visible(session, key, current_user))


@router.post("", dependencies=[Depends(require_admin)])
def save_setting(payload: SettingWrite, session: Session = Depends(get_session)):
    """Insert or overwrite a setting (admin only)."""
    service.set(session, payload.key, payload.value)
    return {"success": True, "message": "Setting saved successfully"}
