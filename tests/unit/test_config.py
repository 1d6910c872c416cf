"""
Unit tests for environment configuration.
"""

import pytest

from kb_search.config import RerankConfig, Settings, load_environment

pytestmark = pytest.mark.unit


class TestRerankConfig:
    """Test rerank settings snapshot"""

    def test_defaults(self):
        config = RerankConfig()
        assert config.enabled is False
        assert config.endpoint == ""
        assert config.api_key == ""
        assert config.model == "gpt-3.5-turbo"
        assert config.is_configured is False

    def test_configured_requires_all_three(self):
        assert RerankConfig(enabled=True, endpoint="https://llm/v1", api_key="k").is_configured
        assert not RerankConfig(enabled=False, endpoint="https://llm/v1", api_key="k").is_configured
        assert not RerankConfig(enabled=True, endpoint="", api_key="k").is_configured
        assert not RerankConfig(enabled=True, endpoint="https://llm/v1", api_key="  ").is_configured

    def test_api_key_not_in_repr(self):
        config = RerankConfig(enabled=True, endpoint="https://llm/v1", api_key="sk-secret")
        assert "sk-secret" not in repr(config)

    def test_from_env(self):
        config = RerankConfig.from_env({
            "RERANK_ENABLED": "True",
            "RERANK_ENDPOINT": " https://llm/v1/chat/completions ",
            "RERANK_API_KEY": "sk-test",
            "RERANK_MODEL": "gpt-4o-mini",
        })
        assert config == RerankConfig(
            enabled=True,
            endpoint="https://llm/v1/chat/completions",
            api_key="sk-test",
            model="gpt-4o-mini",
        )

    def test_from_env_defaults(self):
        config = RerankConfig.from_env({})
        assert config == RerankConfig()

    def test_from_env_blank_model_uses_default(self):
        assert RerankConfig.from_env({"RERANK_MODEL": ""}).model == "gpt-3.5-turbo"

    def test_from_process_environment(self, monkeypatch):
        monkeypatch.setenv("RERANK_ENABLED", "1")
        monkeypatch.setenv("RERANK_ENDPOINT", "https://llm")
        monkeypatch.setenv("RERANK_API_KEY", "key")
        assert RerankConfig.from_env().is_configured


class TestSettings:
    """Test service settings"""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.log_level == "INFO"
        assert settings.port == 8080
        assert settings.max_results == 10
        assert settings.rerank_timeout == 10.0
        assert settings.rerank == RerankConfig()

    def test_overrides(self):
        settings = Settings.from_env({
            "LOG_LEVEL": "debug",
            "PORT": "9000",
            "SEARCH_MAX_RESULTS": "5",
            "RERANK_TIMEOUT_SECONDS": "2.5",
        })
        assert settings.log_level == "DEBUG"
        assert settings.port == 9000
        assert settings.max_results == 5
        assert settings.rerank_timeout == 2.5

    @pytest.mark.parametrize("name,value", [
        ("PORT", "eighty"),
        ("SEARCH_MAX_RESULTS", "0"),
        ("RERANK_TIMEOUT_SECONDS", "-1"),
    ])
    def test_invalid_numbers(self, name, value):
        with pytest.raises(ValueError, match=name):
            Settings.from_env({name: value})


class TestLoadEnvironment:
    """Test .env.local / .env loading"""

    def test_prefers_env_local(self, tmp_path, monkeypatch):
        monkeypatch.delenv("KB_SEARCH_TEST_VALUE", raising=False)
        (tmp_path / ".env").write_text("KB_SEARCH_TEST_VALUE=from-env\n")
        (tmp_path / ".env.local").write_text("KB_SEARCH_TEST_VALUE=from-local\n")

        loaded = load_environment(tmp_path)

        import os
        assert loaded == tmp_path / ".env.local"
        assert os.environ["KB_SEARCH_TEST_VALUE"] == "from-local"
        monkeypatch.delenv("KB_SEARCH_TEST_VALUE")

    def test_no_files(self, tmp_path):
        assert load_environment(tmp_path) is None
