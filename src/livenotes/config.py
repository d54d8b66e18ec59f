"""
App configuration - using pydantic settings for env vars
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_DEFAULT_SECRET = "dev-secret-change-me"


class Settings(BaseSettings):
    """App settings - loads from .env file"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # basic app stuff
    app_name: str = Field(default="LiveNotes API")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)  # set to True for dev

    # server config
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    reload: bool = Field(default=False)

    # JWT
    secret_key: str = Field(default=INSECURE_DEFAULT_SECRET, description="JWT secret key")
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_minutes: int = Field(
        default=120, description="Access token expiration in minutes"
    )

    # CORS - permissive by default so browser clients on any origin can connect
    cors_origins: list[str] = Field(default=["*"], description="CORS allowed origins")
    cors_allow_credentials: bool = Field(default=False, description="CORS allow credentials")

    # Notes
    max_note_length: int = Field(default=5000, description="Maximum note content length")

    # Live channel
    socket_auth_policy: Literal["permissive", "strict"] = Field(
        default="permissive",
        description="permissive: bad/missing socket tokens connect read-only; strict: rejected",
    )
    heartbeat_interval_seconds: float = Field(
        default=30.0, description="Idle seconds before a heartbeat probes a subscriber"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Optional[str] = Field(default=None, description="Directory for rotating log files")

    # Environment
    environment: str = Field(default="development", description="Environment name")

    @property
    def uses_insecure_secret(self) -> bool:
        """True when the signing key was never configured."""
        return self.secret_key == INSECURE_DEFAULT_SECRET


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
