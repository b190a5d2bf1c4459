# app/config/settings.py
# Process-wide configuration, read once at startup

import re
from datetime import timedelta
from typing import Annotated, List, Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

PASSWORD_PLACEHOLDER = "<password>"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


class ConfigurationError(Exception):
    """Raised when the environment does not describe a runnable deployment"""


def parse_duration(value) -> timedelta:
    """Parse '90d', '12h', '30m', '45s' or a plain number of seconds"""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"invalid duration '{value}'")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    """Immutable application settings.

    Each field reads the environment variable named by its validation alias,
    falling back to ``.env``. Keyword construction by field name is allowed.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Database
    database_url: str = Field(validation_alias="DB_CONNECTION_STRING")
    db_password: Optional[str] = Field(default=None, validation_alias="DB_PASSWORD")
    db_sslmode: Optional[str] = Field(default=None, validation_alias="DB_SSLMODE")

    # Tokens and cookies
    jwt_secret: str = Field(validation_alias="JWT_SECRET", min_length=1)
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    jwt_expires_in: timedelta = Field(default=timedelta(days=90), validation_alias="JWT_EXPIRES_IN")
    cookie_expires_in: int = Field(default=90, validation_alias="COOKIE_EXPIRES_IN", gt=0)
    cookie_samesite: Optional[str] = Field(default=None, validation_alias="COOKIE_SAMESITE")
    bcrypt_rounds: int = Field(default=12, validation_alias="BCRYPT_ROUNDS", ge=4, le=31)

    # Server
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")
    reload: bool = Field(default=False, validation_alias="RELOAD")
    environment: str = Field(default="production", validation_alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Comma separated in the environment
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=[
            "https://pract-9x4g.vercel.app",  # Production frontend - vercel
            "http://localhost:5173",          # Local development frontend
        ],
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("jwt_expires_in", mode="before")
    @classmethod
    def _parse_expiry(cls, value):
        return parse_duration(value)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_samesite")
    @classmethod
    def _check_samesite(cls, value):
        if value is None:
            return value
        value = value.lower()
        if value not in ("lax", "strict", "none"):
            raise ValueError("must be one of lax, strict, none")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value):
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError("must be one of " + ", ".join(LOG_LEVELS))
        return value

    @model_validator(mode="after")
    def _check_password_placeholder(self):
        if PASSWORD_PLACEHOLDER in self.database_url and not self.db_password:
            raise ValueError(
                "DB_PASSWORD is required when DB_CONNECTION_STRING contains <password>"
            )
        return self

    @property
    def resolved_database_url(self) -> str:
        if PASSWORD_PLACEHOLDER in self.database_url:
            return self.database_url.replace(PASSWORD_PLACEHOLDER, self.db_password)
        return self.database_url

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env") -> "Settings":
        """Build settings from the process environment and ``env_file``.

        Variables already set in the environment take precedence over the file.

        Raises:
            ConfigurationError: if a required variable is missing or invalid
        """
        try:
            return cls(_env_file=env_file)
        except ValidationError as exc:
            problems = []
            for error in exc.errors():
                name = ".".join(str(part) for part in error["loc"]) or "settings"
                problems.append(f"{name}: {error['msg']}")
            raise ConfigurationError("Invalid configuration - " + "; ".join(problems)) from exc
