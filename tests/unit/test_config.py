"""Unit tests for Settings."""

from earnings_analyzer.config import DEFAULT_ENDPOINT, DEFAULT_MODEL, Settings


ENV_VARS = [
    "GROQ_API_KEY",
    "EARNINGS_LLM_ENDPOINT",
    "EARNINGS_LLM_MODEL",
    "EARNINGS_LLM_MAX_TOKENS",
    "EARNINGS_LLM_TEMPERATURE",
    "EARNINGS_LLM_TIMEOUT",
    "EARNINGS_VALIDATE_OUTPUT",
    "EARNINGS_API_HOST",
    "EARNINGS_API_PORT",
    "EARNINGS_LOG_LEVEL",
]


class TestSettings:

    def test_defaults_from_empty_environment(self, monkeypatch):
        for name in ENV_VARS:
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.api_key is None
        assert settings.endpoint == DEFAULT_ENDPOINT
        assert settings.model == DEFAULT_MODEL
        assert settings.max_tokens == 2000
        assert settings.temperature == 0.2
        assert settings.max_transcript_chars == 20000
        assert settings.min_transcript_chars == 100
        assert settings.max_upload_bytes == 20 * 1024 * 1024
        assert settings.validate_output is False

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "secret")
        monkeypatch.setenv("EARNINGS_LLM_MODEL", "llama-3.1-8b-instant")
        monkeypatch.setenv("EARNINGS_LLM_MAX_TOKENS", "1500")
        monkeypatch.setenv("EARNINGS_LLM_TIMEOUT", "30")
        monkeypatch.setenv("EARNINGS_VALIDATE_OUTPUT", "true")
        monkeypatch.setenv("EARNINGS_API_PORT", "9000")
        monkeypatch.setenv("EARNINGS_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.api_key == "secret"
        assert settings.model == "llama-3.1-8b-instant"
        assert settings.max_tokens == 1500
        assert settings.timeout == 30.0
        assert settings.validate_output is True
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_blank_api_key_treated_as_missing(self, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "")
        assert Settings.from_env().api_key is None

    def test_unknown_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("EARNINGS_LOG_LEVEL", "verbose")
        assert Settings.from_env().log_level == "INFO"

    def test_log_level_name_normalized(self, monkeypatch):
        monkeypatch.setenv("EARNINGS_LOG_LEVEL", " warning ")
        assert Settings.from_env().log_level == "WARNING"
