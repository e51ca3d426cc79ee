from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite+aiosqlite:///./splitter.db"
    CREATE_TABLES_ON_STARTUP: bool = True

    JWT_SECRET: str = "change-me"
    JWT_ALGO: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    BCRYPT_ROUNDS: int = 12

    # "any": every authenticated user may fetch any expense by id
    # "participants": only the payer and split participants may
    EXPENSE_READ_SCOPE: Literal["any", "participants"] = "any"

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"


settings = Settings()
