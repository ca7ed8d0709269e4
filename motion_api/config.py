"""All settings, loaded from the environment and the .env file."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND_URL = "https://api.motionflow.app"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Supabase (server-side and public names are both accepted)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    next_public_supabase_url: str = ""

    # Remote AI / places backend
    next_public_api_url: str = DEFAULT_BACKEND_URL
    backend_timeout_seconds: float = 30
    health_timeout_seconds: float = 5

    # Site
    next_public_site_url: str = ""
    vercel_url: str = ""

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "120/minute"
    rate_limit_ai: str = "30/minute"

    @property
    def backend_url(self) -> str:
        return (self.next_public_api_url or DEFAULT_BACKEND_URL).rstrip("/")

    @property
    def resolved_supabase_url(self) -> str:
        return self.supabase_url or self.next_public_supabase_url

    @property
    def supabase_key(self) -> str:
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def site_url(self) -> str:
        if self.next_public_site_url:
            return self.next_public_site_url
        if self.vercel_url:
            return f"https://{self.vercel_url}"
        return "http://localhost:3000"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
