from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Claude API (ingredient detection and recipe generation)
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    gateway_max_tokens: int = 8000
    gateway_timeout_seconds: float = 90.0
    recipe_count: int = 5

    # Uploads
    max_image_mb: float = 10.0

    # Narration (edge-tts)
    voice_name: str = "en-US-AriaNeural"
    voice_rate: str = "-10%"
    narration_timeout_seconds: float = 15.0

    log_level: str = "INFO"

    @property
    def max_image_bytes(self) -> int:
        """Upload size limit in bytes."""
        return int(self.max_image_mb * 1024 * 1024)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
