from __future__ import annotations

import logging
from typing import Protocol

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a logistics assistant for an Indonesian truck-freight marketplace. "
    "Answer in Bahasa Indonesia, recommend only options from the list you are "
    "given, and keep the answer short and concrete."
)


class LLMServiceError(RuntimeError):
    """The language model did not return a usable text payload."""


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str: ...


class GroqTextGenerator:
    """Text generation backed by a Groq chat completion."""

    def __init__(self, config: LLMConfig = DEFAULT_LLM_CONFIG) -> None:
        self.config = config

    def generate(self, prompt: str) -> str:
        """
        Send ``prompt`` to Groq and return the reply text.

        Raises ``LLMServiceError`` when the client is disabled or has no API
        key, when the call fails (timeout, connection, non-2xx status) and
        when the reply carries no text.
        """
        config = self.config
        if not config.enabled or not config.api_key:
            raise LLMServiceError("LLM client is disabled or has no API key")

        try:
            client = Groq(
                api_key=config.api_key,
                timeout=config.timeout,
                max_retries=config.max_retries,
            )
            response = client.chat.completions.create(
                model=config.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=config.max_tokens,
                temperature=config.temperature,
            )
            content = response.choices[0].message.content
        except Exception as exc:
            raise LLMServiceError(f"Groq request failed: {exc}") from exc

        if not isinstance(content, str) or not content.strip():
            raise LLMServiceError("Groq response did not contain any text")
        return content


def get_text_generator() -> TextGenerator:
    """FastAPI dependency returning the default generator."""
    return GroqTextGenerator(DEFAULT_LLM_CONFIG)
