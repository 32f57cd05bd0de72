"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent.parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    app_name: str = "VidTube API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database (SQLite locally, PostgreSQL in production)
    database_url: str = "sqlite:///./vidtube.db"

    # Supabase (identity provider - issues and verifies access tokens)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_key: str = ""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Session cookies
    cookie_secure: bool = False
    access_cookie_name: str = "accessToken"
    refresh_cookie_name: str = "refreshToken"

    # CORS - accepts comma-separated string from env
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Return CORS origins as a list."""
        if self.cors_origins:
            return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return ["http://localhost:5173", "http://localhost:3000"]

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 50


settings = Settings()
