"""
Configuration for the Task Management API
Settings are read from environment variables and an optional .env file
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Runtime
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./tasks.db"
    database_echo: bool = False

    # HTTP
    frontend_url: str = "http://localhost:3000"
    api_version: str = "1.0.0"

    # Upper bound on the `limit` query parameter of the list endpoint
    max_page_limit: int = 100

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()

__all__ = ["Settings", "settings"]
