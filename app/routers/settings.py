from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import User, UserSettings
from app.schemas.settings import SettingsUpdate, SettingsResponse
from app.utils.auth import get_current_user

router = APIRouter()


def get_or_create_settings(db: Session, user: User) -> UserSettings:
    settings = db.query(UserSettings).filter(UserSettings.user_id == user.id).first()
    if settings is None:
        settings = UserSettings(user_id=user.id)
        settings.reset()
        db.add(settings)
        db.commit()
        db.refresh(settings)
    return settings


@router.get("", response_model=SettingsResponse)
@router.get("/", response_model=SettingsResponse, include_in_schema=False)
def read_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"status": "success", "settings": get_or_create_settings(db, current_user)}


@router.patch("", response_model=SettingsResponse)
@router.patch("/", response_model=SettingsResponse, include_in_schema=False)
def update_settings(
    payload: SettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    settings = get_or_create_settings(db, current_user)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(settings, key, value)
    db.commit()
    db.refresh(settings)
    return {"status": "success", "settings": settings}


@router.post("/reset", response_model=SettingsResponse)
def reset_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    settings = get_or_create_settings(db, current_user)
    settings.reset()
    db.commit()
    db.refresh(settings)
    return {"status": "success", "settings": settings}
