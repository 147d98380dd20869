"""Configuration management for RecipeGen.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: only ever held by the proxy (or by cook.py --direct)
        # Missing key is reported per request as a 500, not at startup
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Default: gemini-2.5-flash (fast, supports JSON response mime type)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Shared password checked by the proxy. Unset means every request is rejected.
        self.APP_BASIC_AUTH_PASS: str = os.getenv("APP_BASIC_AUTH_PASS", "")
        # Realm sent back in the WWW-Authenticate challenge
        self.AUTH_REALM: str = os.getenv("AUTH_REALM", "RecipeGen")
        # Server bind address and port for app.py
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8888"))
        # Client side: where the proxy lives and where the credential is cached
        self.PROXY_URL: str = os.getenv("PROXY_URL", "http://localhost:8888/api/generate")
        self.CREDENTIALS_FILE: str = os.getenv("CREDENTIALS_FILE", "~/.recipegen/credentials.json")

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If PORT or PROXY_URL hold invalid values.
        """
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")
        if not self.PROXY_URL.startswith(("http://", "https://")):
            raise ValueError(f"PROXY_URL must be an http(s) URL, got: {self.PROXY_URL}")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
