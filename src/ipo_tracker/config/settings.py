"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "IPO Tracker API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 5174

    # Cache lifetimes (seconds)
    listing_cache_ttl_seconds: int = 5 * 60 * 60
    listing_cache_sweep_seconds: int = 60 * 60
    gmp_cache_ttl_seconds: int = 30 * 60
    gmp_cache_sweep_seconds: int = 10 * 60

    # Upstream fetching
    request_timeout_seconds: int = 15
    session_max_age_seconds: int = 30 * 60
    user_agent: str = DEFAULT_USER_AGENT
    site_base_url: str = "https://www.chittorgarh.com"
    mainboard_list_url: str = "https://www.chittorgarh.com/report/ipo-in-india-list-main-board-sme/82/mainboard/"
    sme_list_url: str = "https://www.chittorgarh.com/report/ipo-in-india-list-main-board-sme/82/sme/"
    max_ipos_to_validate: int = 8
    use_stub_provider: bool = False

    # Explicit company name -> detail page URL overrides
    known_ipo_urls: dict[str, str] = {}

    # Allocation business rules (no cited regulatory source; keep configurable)
    nii_big_share_ratio: float = 2 / 3
    s_hni_max_ratio: float = 0.8
    hni_threshold_amount: int = 1_000_000
    retail_lots: int = 2
    s_hni_min_lots: int = 3


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
