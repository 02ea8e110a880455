"""Application configuration."""

from pydantic_settings import BaseSettings

from .options import DEFAULT_BLUE, DEFAULT_GREEN, DEFAULT_RED


class Settings(BaseSettings):
    """Application settings, overridable via COLOR2GRAY_* environment variables."""

    # Default channel weights in percent
    RED: float = DEFAULT_RED
    GREEN: float = DEFAULT_GREEN
    BLUE: float = DEFAULT_BLUE

    # Default mixing form and desaturation colorspace
    FORM: str = "add"
    COLORSPACE: str = "hsl"

    # Encoding
    JPEG_QUALITY: int = 95

    # Logging
    LOG_LEVEL: str = "WARNING"

    model_config = {"env_prefix": "COLOR2GRAY_"}


settings = Settings()
