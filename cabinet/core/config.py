from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
import os


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Cabinet Kiné"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")

    # Data store: "memory" keeps everything in process, "sql" uses DATABASE_URL
    STORE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite:///./cabinet.db"
    SEED_DEMO_DATA: bool = True

    # Session
    SECRET_KEY: str = "change-this-secret-key-in-production"
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 12 * 60
    SESSION_COOKIE_NAME: str = "physio_user"
    LOGIN_LATENCY_SECONDS: float = 0.6

    # Calendar and ledger dates are read in the clinic's local time
    CLINIC_TIMEZONE: str = "Europe/Paris"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080", "http://testserver"]

    # Remote structured-data backend (not used by any view yet)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    @property
    def remote_backend_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


# Create settings instance
settings = Settings()
