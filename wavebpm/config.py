"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings with env var overrides."""

    # Analysis
    wavelet: int = 2  # Daubechies family index, 1-5
    levels: int = 4
    include_debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    max_upload_mb: int = 50

    model_config = {"env_prefix": "WAVEBPM_"}


settings = Settings()
