from pydantic import BaseModel
from typing import Literal, Optional
from datetime import datetime

from app.utils.sanitize import sanitized

Theme = Literal["light", "dark", "system"]
LanguageStr = sanitized(min_length=2, max_length=10)
TimezoneStr = sanitized(min_length=1, max_length=64)


class SettingsUpdate(BaseModel):
    theme: Optional[Theme] = None
    language: Optional[LanguageStr] = None
    timezone: Optional[TimezoneStr] = None
    email_notifications: Optional[bool] = None
    task_reminders: Optional[bool] = None

    model_config = {
        "extra": "ignore"
    }


class SettingsOut(BaseModel):
    theme: str
    language: str
    timezone: str
    email_notifications: bool
    task_reminders: bool
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class SettingsResponse(BaseModel):
    status: str = "success"
    settings: SettingsOut
