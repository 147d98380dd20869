"""Pytest configuration and fixtures for integration tests.

Loads .env from the project root and skips the whole directory when no
GEMINI_API_KEY is available, since every test here calls the real API.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv


def pytest_configure(config):
    """Load .env before test collection so the API key check sees it."""
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip integration tests if GEMINI_API_KEY is not configured."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip("GEMINI_API_KEY not set; skipping live Gemini tests")


@pytest.fixture
def api_key():
    return os.getenv("GEMINI_API_KEY")
