# app/models/user.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from app.database import Base
from app.utils.dates import utcnow, epoch_micros
from app.utils.security import hash_password, verify_password


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    password_changed_at = Column(DateTime, nullable=True)
    role = Column(String, default="user", nullable=False)
    status = Column(String, default="active", nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
    settings = relationship(
        "UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def set_password(self, raw_password: str, rounds: int = 12) -> None:
        """Hash and store a password; stamps the change time on existing users"""
        self.password = hash_password(raw_password, rounds=rounds)
        if self.id is not None:
            self.password_changed_at = utcnow()

    def check_password(self, raw_password: str) -> bool:
        return verify_password(raw_password, self.password)

    def changed_password_after(self, issued_at_us: int) -> bool:
        """True when the password changed after a token issued at ``issued_at_us``"""
        if self.password_changed_at is None:
            return False
        return epoch_micros(self.password_changed_at) > issued_at_us
