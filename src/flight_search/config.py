"""
Configuration management for flight search service
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import ConfigurationError


class ServerConfig(BaseSettings):
    """Server configuration"""
    port: int = Field(default=8000)
    host: str = Field(default="0.0.0.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_prefix="SERVER_", env_file=".env", extra="ignore")


class AmadeusConfig(BaseSettings):
    """Amadeus API configuration"""
    client_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AMADEUS_CLIENT_ID", "AMADEUS_API_KEY"),
    )
    client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AMADEUS_CLIENT_SECRET", "AMADEUS_API_SECRET"),
    )
    base_url: str = Field(default="https://test.api.amadeus.com")
    token_path: str = Field(default="/v1/security/oauth2/token")
    timeout: float = Field(default=30.0)  # seconds
    token_safety_margin: int = Field(default=300)  # seconds
    location_limit: int = Field(default=10)
    flight_result_limit: int = Field(default=10)
    use_fallback_catalog: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="AMADEUS_", env_file=".env", extra="ignore", populate_by_name=True
    )

    @property
    def token_url(self) -> str:
        return self.base_url.rstrip("/") + self.token_path

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless both client credentials are set"""
        missing = [
            name for name, value in (
                ("AMADEUS_CLIENT_ID", self.client_id),
                ("AMADEUS_CLIENT_SECRET", self.client_secret),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing Amadeus credentials: {', '.join(missing)}"
            )


class AutocompleteConfig(BaseSettings):
    """Client-side autocomplete configuration"""
    debounce_ms: int = Field(default=300)
    min_keyword_length: int = Field(default=2)
    endpoint: str = Field(default="http://localhost:8000/search/locations")
    timeout: float = Field(default=10.0)

    model_config = SettingsConfigDict(env_prefix="AUTOCOMPLETE_", env_file=".env", extra="ignore")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


class LoggingConfig(BaseSettings):
    """Logging configuration"""
    level: str = Field(default="INFO")
    format: str = Field(default="json")  # json or text

    model_config = SettingsConfigDict(env_prefix="LOGGING_", env_file=".env", extra="ignore")


class Config:
    """Main configuration class"""

    def __init__(
        self,
        server: Optional[ServerConfig] = None,
        amadeus: Optional[AmadeusConfig] = None,
        autocomplete: Optional[AutocompleteConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ):
        self.server = server or ServerConfig()
        self.amadeus = amadeus or AmadeusConfig()
        self.autocomplete = autocomplete or AutocompleteConfig()
        self.logging = logging or LoggingConfig()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.server.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.server.environment.lower() == "production"


@lru_cache()
def get_config() -> Config:
    return Config()
