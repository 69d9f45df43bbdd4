"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    brandpattern_env: str = "development"
    brandpattern_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Generation defaults
    default_shape_count: int = 100
    default_offset_intensity: float = 0.3
    default_enable_rotation: bool = True
    default_canvas_size: int = 1080

    # Rendering / export
    preview_size: int = 400
    export_prefix: str = "brand-pattern"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
