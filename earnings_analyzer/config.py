"""
Runtime configuration for the earnings call analyzer.

All settings are gathered into one Settings object that is handed to the
API app, the analyzer and the LLM client at construction time.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
MAX_UPLOAD_BYTES = 20 * 1024 * 1024  # 20MB, enforced by the client only


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_log_level(name: str, default: str = "INFO") -> str:
    """Read a logging level name; unknown names fall back to the default."""
    value = os.getenv(name, default).strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        return default
    return value


@dataclass
class Settings:
    """Configuration for the analysis pipeline and its LLM provider."""
    api_key: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    max_tokens: int = 2000
    temperature: float = 0.2  # Low temperature for consistent extraction
    timeout: float = 60.0

    min_transcript_chars: int = 100
    max_transcript_chars: int = 20000  # ~5k tokens
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    validate_output: bool = False

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            api_key=os.getenv("GROQ_API_KEY") or None,
            endpoint=os.getenv("EARNINGS_LLM_ENDPOINT", DEFAULT_ENDPOINT),
            model=os.getenv("EARNINGS_LLM_MODEL", DEFAULT_MODEL),
            max_tokens=int(os.getenv("EARNINGS_LLM_MAX_TOKENS", 2000)),
            temperature=float(os.getenv("EARNINGS_LLM_TEMPERATURE", 0.2)),
            timeout=float(os.getenv("EARNINGS_LLM_TIMEOUT", 60.0)),
            validate_output=_env_bool("EARNINGS_VALIDATE_OUTPUT"),
            host=os.getenv("EARNINGS_API_HOST", "0.0.0.0"),
            port=int(os.getenv("EARNINGS_API_PORT", 8000)),
            log_level=_env_log_level("EARNINGS_LOG_LEVEL"),
        )
