"""
Can't Stop Odds - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import logging
import os
from functools import lru_cache

from pydantic_settings import BaseSettings


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in (
            "GAME_API_URL",
            "REQUEST_TIMEOUT",
            "REQUEST_RETRIES",
            "DEBUG",
            "LOG_LEVEL",
            "RISK_HORIZON",
        ):
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Game server
    game_api_url: str = "http://localhost:8000/api"
    request_timeout: float = 10.0
    request_retries: int = 2

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Odds panel
    risk_horizon: int = 3

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
