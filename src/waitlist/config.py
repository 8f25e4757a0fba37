from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    # Storage binding (SQLAlchemy URL). Unset means the binding is not configured.
    WAITLIST_DB_URL: Optional[str] = None

    # Header set by the TLS-terminating proxy, trusted verbatim
    CLIENT_IP_HEADER: str = "CF-Connecting-IP"

    # Monitoring settings
    ENABLE_TRACING: bool = False
    LOG_LEVEL: str = "INFO"

    # Server settings
    WAITLIST_HOST: str = "0.0.0.0"
    WAITLIST_PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

settings = Settings()

def get_settings() -> Settings:
    return settings
