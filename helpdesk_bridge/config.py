"""Application configuration"""
from pydantic_settings import BaseSettings
from functools import lru_cache

# Outbound call timeouts (seconds)
REQUEST_TIMEOUT = 30.0
PROBE_TIMEOUT = 15.0


class Settings(BaseSettings):
    """Application settings"""

    # Helpdesk connection
    helpdesk_vendor: str = "freescout"
    helpdesk_url: str = ""
    helpdesk_api_key: str = ""
    helpdesk_api_secret: str = ""  # LibreDesk only
    default_mailbox_id: str = "1"

    # Public site URL, shown as "Submitted via" in conversation bodies
    site_url: str = ""

    # Supabase (submission storage)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_anon_key: str = ""

    # Application
    environment: str = "development"
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
