"""Library configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # HTTP
    timeout: float | None = 30.0
    user_agent: str = "ocaepak/0.1.0 (+https://www.oca.com.ar)"

    # Upstream
    base_url: str | None = None  # Overrides base_url from the service file
    service_file: Path = Path(__file__).parent / "service.yaml"

    class Config:
        env_prefix = "OCA_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
