"""Application configuration with environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite:///./db.sqlite3"

    # Storage
    UPLOAD_DIR: str = "uploads"

    # Application
    APP_NAME: str = "Document Portal"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Portal UI; empty means the API is served from the same origin
    API_BASE_URL: str = ""

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
