"""Unit tests for configuration management."""

import pytest

from recipegen.utils.config import Config


CONFIG_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "APP_BASIC_AUTH_PASS",
    "AUTH_REALM",
    "HOST",
    "PORT",
    "PROXY_URL",
    "CREDENTIALS_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, clean_env):
        """Test that Config uses default values when env vars not set."""
        config = Config()

        assert config.GEMINI_API_KEY == ""
        assert config.GEMINI_MODEL == "gemini-2.5-flash"
        assert config.APP_BASIC_AUTH_PASS == ""
        assert config.AUTH_REALM == "RecipeGen"
        assert config.HOST == "0.0.0.0"
        assert config.PORT == 8888
        assert config.PROXY_URL == "http://localhost:8888/api/generate"
        assert config.CREDENTIALS_FILE == "~/.recipegen/credentials.json"

    def test_config_loads_from_environment(self, clean_env):
        """Test that Config loads values from environment variables."""
        clean_env.setenv("GEMINI_API_KEY", "test_gemini_key")
        clean_env.setenv("GEMINI_MODEL", "custom-model")
        clean_env.setenv("APP_BASIC_AUTH_PASS", "s3cret")
        clean_env.setenv("AUTH_REALM", "Kitchen")
        clean_env.setenv("PORT", "9000")
        clean_env.setenv("PROXY_URL", "https://recipes.example.com/api/generate")

        config = Config()

        assert config.GEMINI_API_KEY == "test_gemini_key"
        assert config.GEMINI_MODEL == "custom-model"
        assert config.APP_BASIC_AUTH_PASS == "s3cret"
        assert config.AUTH_REALM == "Kitchen"
        assert config.PORT == 9000
        assert isinstance(config.PORT, int)
        assert config.PROXY_URL == "https://recipes.example.com/api/generate"


class TestConfigValidation:
    """Test Config validation logic."""

    def test_validate_succeeds_with_defaults(self, clean_env):
        """A missing API key is a per-request error, not a startup error."""
        Config().validate()

    @pytest.mark.parametrize("port", ["0", "70000"])
    def test_validate_rejects_out_of_range_port(self, clean_env, port):
        clean_env.setenv("PORT", port)
        with pytest.raises(ValueError, match="PORT"):
            Config().validate()

    def test_validate_rejects_non_http_proxy_url(self, clean_env):
        clean_env.setenv("PROXY_URL", "ftp://example.com/api/generate")
        with pytest.raises(ValueError, match="PROXY_URL"):
            Config().validate()
