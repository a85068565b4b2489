"""
OpenAI LLM provider implementation.

Uses the OpenAI Python SDK (``openai.AsyncOpenAI``) chat completions API.
Every call is a single attempt; SDK errors are translated to builtin
exceptions so callers do not depend on the SDK.
"""

import logging

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)

from vocalize.core.config import get_settings
from vocalize.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


class OpenAILLM(BaseLLM):
    """OpenAI chat-completions provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.openai_api_key.get_secret_value()
        self._model = model or settings.openai_model
        self._max_tokens = max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature
        self._client = AsyncOpenAI(api_key=self._api_key)

    async def generate(self, prompt: str, **kwargs) -> str:
        """Generate a free-form text response."""
        messages: list[dict[str, str]] = []
        system = kwargs.pop("system", None)
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        temperature = kwargs.pop("temperature", None)
        max_tokens = kwargs.pop("max_tokens", None) or self._max_tokens
        request: dict = {
            "model": self._model,
            "messages": messages,
            "temperature": temperature if temperature is not None else self._temperature,
        }
        if max_tokens:
            request["max_tokens"] = max_tokens

        try:
            response = await self._client.chat.completions.create(**request)
            return response.choices[0].message.content or ""

        except APITimeoutError as exc:
            logger.warning("OpenAI API timeout: %s", exc)
            raise TimeoutError(f"OpenAI API request timed out: {exc}") from exc
        except APIConnectionError as exc:
            logger.warning("OpenAI API connection error: %s", exc)
            raise ConnectionError(f"Failed to connect to OpenAI API: {exc}") from exc
        except RateLimitError as exc:
            logger.warning("OpenAI API rate limit hit: %s", exc)
            raise ConnectionError(f"OpenAI API rate limit exceeded: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected OpenAI API error: %s", exc)
            raise RuntimeError(f"OpenAI API error: {exc}") from exc
