"""Settings management for Google Docs Markdown."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables are prefixed with GDM_.
    Example: GDM_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="GDM_",
        extra="ignore",
    )

    # Rendering settings
    include_line_numbers: bool = Field(
        default=False,
        description="Prefix each rendered Markdown line with its line number",
    )

    # Compilation settings
    image_width_pt: float = Field(default=300, gt=0, description="Width of inserted inline images, in points")
    image_height_pt: float = Field(default=200, gt=0, description="Height of inserted inline images, in points")
    horizontal_rule_width: int = Field(
        default=50,
        ge=1,
        description="Number of box-drawing characters used to draw a horizontal rule",
    )
    horizontal_rule_gray: float = Field(
        default=0.6,
        ge=0,
        le=1,
        description="Gray level (0 black, 1 white) of the horizontal rule substitute",
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="pretty",
        description="Log format: 'pretty' for colored output, 'json' for structured",
    )


# Global settings instance
settings = Settings()
