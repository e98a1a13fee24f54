"""
Chat completion client for transcript analysis.

Talks to an OpenAI-compatible chat completions endpoint (Groq by default)
and asks for a JSON object response.
"""

import logging
import time
from typing import Optional

import httpx

from .config import Settings


logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """Minimal client for a hosted chat completion endpoint."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        """Initialize with the provider configuration."""
        if not settings.api_key:
            raise ValueError(
                "GROQ_API_KEY environment variable is required. "
                "Set it with: export GROQ_API_KEY='your-key-here'"
            )
        self.settings = settings
        self.client = http_client or httpx.Client(timeout=settings.timeout)

    @property
    def model(self) -> str:
        return self.settings.model

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Send a system + user message pair and return the completion text.

        Returns an empty string when the provider sends back no content.
        HTTP and transport errors propagate to the caller.
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.api_key}"
        }

        payload = {
            "model": self.settings.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt}
            ],
            "response_format": {"type": "json_object"},
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens
        }

        start = time.time()
        response = self.client.post(self.settings.endpoint, headers=headers, json=payload)
        response.raise_for_status()
        result = response.json()
        logger.info("Completion from %s received in %.2fs", self.settings.model, time.time() - start)

        choices = result.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""

    def close(self):
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
