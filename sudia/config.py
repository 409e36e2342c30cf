"""
Configuration management for the sudia historical-map data client.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROXIES = ",".join([
    "https://corsproxy.io/?{url}",
    "https://api.codetabs.com/v1/proxy?quest={url}",
    "https://api.allorigins.win/get?url={url}",
])


class BackendSettings(BaseSettings):
    """Settings for the heritage REST backend."""

    model_config = SettingsConfigDict(
        env_prefix="BACKEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "https://web-production-c3ccb.up.railway.app"
    timeout: float = 15.0  # seconds, per attempt
    use_proxies: bool = True

    # URL templates, "{url}" is replaced by the percent-encoded target URL
    proxies: str = DEFAULT_PROXIES

    @property
    def proxy_templates(self) -> list[str]:
        """Parse proxy templates into a list."""
        return [p.strip() for p in self.proxies.split(",") if p.strip()]


class RoutingSettings(BaseSettings):
    """OSRM routing engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "https://router.project-osrm.org"
    timeout: float = 8.0
    profile: str = "driving"


class GeocodingSettings(BaseSettings):
    """Nominatim geocoder settings."""

    model_config = SettingsConfigDict(
        env_prefix="GEOCODER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "https://nominatim.openstreetmap.org"
    timeout: float = 4.0
    accept_language: str = "vi"
    country_codes: str = "vn"
    result_limit: int = 5
    user_agent: str = "sudia/1.0 (historical map of Vietnam)"


class APISettings(BaseSettings):
    """API server settings."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Fetch sites and persons at startup so the first request is fast
    warm_cache: bool = True

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


class LoggingSettings(BaseSettings):
    """loguru sink settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"

    # Optional rotating file sink, compressed with gzip on rotation
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "1 week"


class Settings(BaseSettings):
    """Main settings class that combines all settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sub-settings
    backend: BackendSettings = Field(default_factory=BackendSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    geocoding: GeocodingSettings = Field(default_factory=GeocodingSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for quick access
settings = get_settings()


# =============================================================================
# Domain constants
# =============================================================================

# site_type sentinel for a city rendered as a site
CITY_SITE_TYPE = "Thành phố"

# site_type of a person rendered as a virtual map marker
PERSON_MARKER_TYPE = "Nhân vật"

DEFAULT_SITE_TYPE = "Di tích"
UNNAMED = "Không tên"
DEFAULT_EVENT_NAME = "Sự kiện"

# Key of the fallback entry when additional_info is not a JSON object
INFO_FALLBACK_KEY = "Thông tin"
HOMETOWN_INFO_KEY = "Quê quán"
CITY_ID_INFO_KEY = "City ID"

# Biography phrases that introduce a place of birth or origin
BIRTHPLACE_PHRASES = ("sinh tại", "sinh ở", "người", "quê")

# Site names shorter than this never match free text
MIN_PLACE_NAME_LENGTH = 3
