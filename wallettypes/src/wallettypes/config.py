"""
Configuration management using pydantic-settings.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

FeeUnit = Literal["sat/vB", "sat/kvB", "sat/kwu", "BTC/kvB"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WALLETTYPES_", env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    log_level: str = "INFO"

    # Unit assumed for fee rates passed on the command line
    fee_unit: FeeUnit = "sat/vB"


def get_settings() -> Settings:
    return Settings()
