from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./team_tasks.db"
    SQL_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_PATH: str = "error.log"

    CORS_ORIGIN_REGEX: str = "https?://.*"

    class Config:
        env_file = ".env"

settings = Settings()
