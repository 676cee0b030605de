"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
    )
    vanish_env: str = "development"
    vanish_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Hosted image model used for inpainting
    inpaint_model: str = "gemini-2.5-flash-image"

    # Durable key-value store (history lives here)
    vanish_data_dir: Path = Path.home() / ".vanish"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def storage_file(self) -> Path:
        return self.vanish_data_dir / "storage.json"


settings = Settings()
