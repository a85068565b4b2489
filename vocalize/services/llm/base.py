"""
Abstract base class for LLM providers.

All LLM implementations (OpenAI, Claude, Ollama) must implement this
interface, enabling provider-agnostic rating and suggestion logic in the
service layer.
"""

from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    async def generate(self, prompt: str, **kwargs) -> str:
        """Generate a free-form text response.

        Args:
            prompt: The user prompt to send to the model.
            **kwargs: Provider-specific options (system, temperature,
                max_tokens).

        Returns:
            The model's text response.

        Raises:
            ConnectionError: The provider could not be reached.
            TimeoutError: The request timed out.
            RuntimeError: Any other provider failure.
        """
