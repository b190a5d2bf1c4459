from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.utils.dates import utcnow

DEFAULT_SETTINGS = {
    "theme": "system",
    "language": "en",
    "timezone": "UTC",
    "email_notifications": True,
    "task_reminders": True,
}

class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    theme = Column(String, default=DEFAULT_SETTINGS["theme"], nullable=False)
    language = Column(String, default=DEFAULT_SETTINGS["language"], nullable=False)
    timezone = Column(String, default=DEFAULT_SETTINGS["timezone"], nullable=False)
    email_notifications = Column(Boolean, default=DEFAULT_SETTINGS["email_notifications"], nullable=False)
    task_reminders = Column(Boolean, default=DEFAULT_SETTINGS["task_reminders"], nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="settings")

    def reset(self):
        for key, value in DEFAULT_SETTINGS.items():
            setattr(self, key, value)
