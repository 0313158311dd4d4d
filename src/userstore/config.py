from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Repository configuration loaded from environment variables."""

    database_url: str = Field("sqlite+aiosqlite:///users.db", env="DATABASE_URL")
    database_echo: bool = Field(False, env="DATABASE_ECHO")
    bcrypt_rounds: int = Field(10, env="BCRYPT_ROUNDS")
    min_password_length: int = Field(8, env="MIN_PASSWORD_LENGTH")
    default_role: str = Field("default", env="DEFAULT_ROLE")


settings = Settings()
