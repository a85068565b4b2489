"""
FastAPI dependencies that build the configured providers.

Providers are created once per process. Tests swap them out through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from vocalize.core.config import get_settings
from vocalize.services.llm import BaseLLM, create_llm
from vocalize.services.scoring.ai_rater import AIRater
from vocalize.services.suggestions import SuggestionGenerator
from vocalize.services.transcription import BaseSTT, create_stt


@lru_cache
def get_llm() -> BaseLLM:
    """Return the text-generation provider selected by ``llm_provider``."""
    return create_llm(provider=get_settings().llm_provider)


@lru_cache
def get_stt() -> BaseSTT:
    """Return the speech-to-text provider selected by ``stt_provider``."""
    return create_stt(provider=get_settings().stt_provider)


def get_rater(llm: BaseLLM = Depends(get_llm)) -> AIRater:
    return AIRater(llm)


def get_suggester(llm: BaseLLM = Depends(get_llm)) -> SuggestionGenerator:
    return SuggestionGenerator(llm)
