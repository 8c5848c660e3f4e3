"""
Configuration module for BookReview Hub.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration: the backend base URL and the
logging level.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        API_URL (str): Base URL of the BookReview Hub backend.
        LOG_LEVEL (str): Logging level name (e.g., 'INFO', 'DEBUG').
    """
    API_URL: str = os.getenv("API_URL", "http://localhost:5000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def api_base_url(self) -> str:
        """
        Returns API_URL without trailing slashes.

        Returns:
            str: Normalised base URL.
        """
        return self.API_URL.rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
