from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime

from app.utils.sanitize import sanitized

PASSWORD_MIN_LENGTH = 8

NameStr = sanitized(min_length=1, max_length=100)
StatusStr = sanitized(max_length=100)


class UserCreate(BaseModel):
    name: NameStr
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    password_confirm: str = Field(alias="passwordConfirm")

    model_config = {
        "populate_by_name": True
    }

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirm:
            raise ValueError("Passwords are not the same!")
        return self


class UserLogin(BaseModel):
    # Presence is checked by the handler so a missing field is a 401, not a 400
    email: Optional[str] = None
    password: Optional[str] = None


class PasswordUpdate(BaseModel):
    password: Optional[str] = None
    new_password: str = Field(alias="newPassword", min_length=PASSWORD_MIN_LENGTH)
    password_confirm: str = Field(alias="passwordConfirm")

    model_config = {
        "populate_by_name": True
    }

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.password_confirm:
            raise ValueError("Passwords are not the same!")
        return self


class UserUpdateMe(BaseModel):
    """Fields a user may change on their own profile.

    Anything else in the request body (role, password, ...) is ignored.
    """
    name: Optional[NameStr] = None
    email: Optional[EmailStr] = None
    status: Optional[StatusStr] = None

    model_config = {
        "extra": "ignore"
    }

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v else v


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: str
    status: str
    password_changed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class UserResponse(BaseModel):
    status: str = "success"
    user: UserOut
