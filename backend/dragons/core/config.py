from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from dragons.core.constants import TEAM_SIZE_LIMIT


class Settings(BaseSettings):
    PROJECT_NAME: str = "Deadlines & Dragons"
    API_PREFIX: str = "/api"

    MONGODB_URL: str
    DATABASE_NAME: str = "deadlines_dragons"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Member cap applied to newly created teams (1-4)
    TEAM_MAX_SIZE: int = Field(4, ge=1, le=TEAM_SIZE_LIMIT)

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Bootstrap account created when the users collection is empty
    INITIAL_ADMIN_USERNAME: str = "admin"
    INITIAL_ADMIN_EMAIL: str = "admin@example.com"

    class Config:
        case_sensitive = True
        env_file = ".env"
