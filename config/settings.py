"""
Configuration management using Pydantic Settings.

Environment variables:
- SOLVER_URL: Base URL of the recognition/solving service
- SOLVER_TIMEOUT: Request timeout in seconds
- CANVAS_WIDTH / CANVAS_HEIGHT: Drawing surface size in pixels
- STROKE_WIDTH: Pen width in pixels
- RESULT_DISPLAY_DELAY: Seconds before solved results appear on the board
- LOG_LEVEL: Logging level name
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import DEFAULT_COLOR, DEFAULT_DISPLAY_DELAY, DEFAULT_LINE_WIDTH


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Solving service
    solver_url: str = Field(default="http://localhost:8900")
    solver_timeout: float = Field(default=30.0)

    # Drawing surface
    canvas_width: int = Field(default=1280, gt=0)
    canvas_height: int = Field(default=720, gt=0)
    stroke_width: int = Field(default=DEFAULT_LINE_WIDTH, gt=0)
    default_color: str = Field(default=DEFAULT_COLOR)

    # Overlay placement
    result_display_delay: float = Field(default=DEFAULT_DISPLAY_DELAY, ge=0.0)

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8002)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="")

    def get_canvas_size(self) -> tuple:
        """Get canvas size as (width, height)."""
        return self.canvas_width, self.canvas_height


# Global settings instance
settings = Settings()
