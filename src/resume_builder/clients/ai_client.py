"""Claude API wrapper for text suggestions.

Calls are made exactly once: the SDK's own retries are disabled and a
failure surfaces as ExternalServiceError for the caller to report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic

from resume_builder.config import AIConfig
from resume_builder.errors import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class AIResponse:
    """Response from the model including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class AIClient:
    """Async Claude API client without automatic retries."""

    def __init__(self, api_key: str | None = None, config: AIConfig | None = None):
        self.config = config or AIConfig()
        kwargs: dict = {"max_retries": 0, "timeout": float(self.config.timeout)}
        if api_key is not None:
            kwargs["api_key"] = api_key
        self.client = anthropic.AsyncAnthropic(**kwargs)

    async def generate(self, prompt: str, system: str = "", max_tokens: int | None = None) -> AIResponse:
        """Send a prompt to Claude and return the text response with usage."""
        kwargs: dict = {
            "model": self.config.model,
            "max_tokens": max_tokens or self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system
        logger.debug("AI call: model=%s", self.config.model)
        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.APIError as exc:
            logger.error("AI call failed", exc_info=True)
            raise ExternalServiceError(f"Suggestion service failed: {exc}") from exc
        except TypeError as exc:
            # Raised by the SDK before sending when no API key or token is set.
            logger.error("AI call not attempted: %s", exc)
            raise ExternalServiceError(f"Suggestion service is not configured: {exc}") from exc

        text = "".join(
            block.text for block in message.content if getattr(block, "type", "") == "text"
        ).strip()
        if not text:
            raise ExternalServiceError("Suggestion service returned an empty response")
        logger.debug(
            "AI response: %d input, %d output tokens",
            message.usage.input_tokens,
            message.usage.output_tokens,
        )
        return AIResponse(
            text=text,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
