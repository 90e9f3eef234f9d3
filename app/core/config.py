from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Asset Tracker API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_HOST: Optional[str] = None
    DATABASE_PORT: Optional[str] = None
    DATABASE_USER: Optional[str] = None
    DATABASE_PASSWORD: Optional[str] = None
    DATABASE_NAME: Optional[str] = None

    DATABASE_URL: str = ""
    TEST_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = False

    def __init__(self, **data):
        super().__init__(**data)
        if self.DATABASE_URL:
            return
        parts = (self.DATABASE_HOST, self.DATABASE_PORT, self.DATABASE_USER, self.DATABASE_PASSWORD, self.DATABASE_NAME)
        if all(parts):
            self.DATABASE_URL = (
                f'postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}'
                f'@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}'
            )
        else:
            self.DATABASE_URL = "sqlite:///./asset_tracker.db"

    DEFAULT_CURRENCY: str = "JPY"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Daily portfolio snapshots
    SNAPSHOT_SCHEDULER_ENABLED: bool = True
    SNAPSHOT_CRON_HOUR: int = 0
    SNAPSHOT_CRON_MINUTE: int = 0

    class Config:
        env_file = ".env"

settings = Settings()
