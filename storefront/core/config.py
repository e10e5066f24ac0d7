from typing import List
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field

class Settings(BaseSettings):
    PROJECT_NAME: str = "Storefront API"
    VERSION: str = "1.0.0"
    DATABASE_URL: str = Field("sqlite:///./storefront.db", validation_alias=AliasChoices("DATABASE_URL", "CONNECTION_STRING"))
    SQL_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_COLORS: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
