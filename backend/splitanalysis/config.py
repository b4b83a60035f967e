"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

from splitanalysis.shared.constants import TimeDataType


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === WinSplits export ===
    time_data_type: TimeDataType = Field(
        default=TimeDataType.RELATIVE,
        description="Which representation the exported time fields hold"
    )
    source_encoding: str = Field(
        default="utf-8-sig",
        description="Encoding of exported text files"
    )

    # === HTTP ===
    http_timeout: float = Field(default=30.0, description="Download timeout in seconds")

    @field_validator('time_data_type', mode='before')
    @classmethod
    def normalize_time_data_type(cls, v):
        """Accept 'relative' / 'actual' in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
