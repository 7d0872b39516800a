from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_FILE_PATH = Path(".env")


class Settings(BaseModel):
    env: str = Field(default="dev", alias="ENV")
    timezone: str = Field(default="Asia/Almaty", alias="TIMEZONE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(default="", alias="DATABASE_URL")
    postgres_db: str = Field(default="postgres", alias="POSTGRES_DB")
    postgres_user: str = Field(default="postgres", alias="POSTGRES_USER")
    postgres_password: str = Field(default="postgres", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    supabase_url: str = Field(default="http://localhost:54321", alias="SUPABASE_URL")
    supabase_anon_key: str = Field(default="", alias="SUPABASE_ANON_KEY")
    supabase_jwt_secret: str = Field(default="secret", alias="SUPABASE_JWT_SECRET")
    auth_timeout_sec: float = Field(default=10.0, alias="AUTH_TIMEOUT_SEC")

    attendance_edit_pin: str = Field(default="7777", alias="ATTENDANCE_EDIT_PIN")
    cancellation_cutoff_min: int = Field(default=90, alias="CANCELLATION_CUTOFF_MIN")
    portal_email_domain: str = Field(default="balance.yoga", alias="PORTAL_EMAIL_DOMAIN")
    password_reset_redirect_url: str = Field(
        default="http://localhost:5173/reset-password", alias="PASSWORD_RESET_REDIRECT_URL"
    )

    default_admin_email: str = Field(default="", alias="DEFAULT_ADMIN_EMAIL")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    class Config:
        populate_by_name = True

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(dotenv_path=ENV_FILE_PATH, override=False)
    return Settings(**os.environ)
