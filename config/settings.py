"""
VT-UOS Population Console - Application Settings
Manages environment variables and configuration using Pydantic
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
import os


COLOR_SCHEMES = ("green_phosphor", "amber", "white")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All demographic coefficients are exposed here so they can be tuned
    per vault (or overridden in tests) without touching the engine.
    """

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    # File storage
    DATA_DIR: str = "data"
    EXPORT_DIR: str = "exports"
    LOG_DIR: str = "logs"

    # Database
    DATABASE_URL: str = "sqlite:///data/vault.db"

    # Vault identity
    VAULT_NUMBER: int = 76
    VAULT_DESIGNATION: str = "Vault 76"
    DESIGNED_CAPACITY: int = 500
    VAULT_START_DATE: str = "2077-10-23T09:47:00Z"
    VAULT_TIME_SCALE: float = 1.0

    # Display
    COLOR_SCHEME: str = "green_phosphor"
    MAX_CONTENT_WIDTH: int = 120
    CENSUS_PAGE_SIZE: int = 25

    # Demographics: record scanning
    DEMOGRAPHICS_PAGE_SIZE: int = 100

    # Demographics: fertility (≈2.1 lifetime births over a 26-year window)
    CHILDBEARING_FRACTION: float = 0.4
    ANNUAL_BIRTH_RATE: float = 0.08
    BREEDING_POOL_THRESHOLD: int = 100

    # Demographics: annual mortality per age band
    MORTALITY_INFANT: float = 0.01
    MORTALITY_CHILD: float = 0.001
    MORTALITY_ADOLESCENT: float = 0.001
    MORTALITY_YOUNG_ADULT: float = 0.002
    MORTALITY_ADULT: float = 0.003
    MORTALITY_MIDDLE_AGED: float = 0.01
    MORTALITY_SENIOR: float = 0.05
    MIN_DEATHS_POPULATION: int = 50  # Above this, at least 1 death/year

    # Viability thresholds
    MINIMUM_VIABLE_POPULATION: int = 160
    FAMILY_INCENTIVE_GROWTH_RATE: float = 0.5
    SEX_RATIO_MIN: float = 0.4
    SEX_RATIO_MAX: float = 0.6
    GENETIC_MONITORING_POPULATION: int = 300
    PROJECTION_YEARS: int = 25

    # Genetics
    COI_WARNING_THRESHOLD: float = 0.0625  # First-cousin level

    # Facilities
    MAINTENANCE_INTERVAL_DAYS: int = 90
    FACILITIES_PAGE_SIZE: int = 25

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("VAULT_NUMBER")
    @classmethod
    def _check_vault_number(cls, value: int) -> int:
        if value < 1 or value > 999:
            raise ValueError("VAULT_NUMBER must be between 1 and 999")
        return value

    @field_validator("COLOR_SCHEME")
    @classmethod
    def _check_color_scheme(cls, value: str) -> str:
        if value not in COLOR_SCHEMES:
            raise ValueError(f"invalid COLOR_SCHEME: {value}")
        return value

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Create directories if they don't exist
        os.makedirs(self.DATA_DIR, exist_ok=True)
        os.makedirs(self.EXPORT_DIR, exist_ok=True)
        if self.LOG_DIR:
            os.makedirs(self.LOG_DIR, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached settings instance.
    Uses lru_cache to avoid re-reading .env on every call.
    """
    return Settings()
