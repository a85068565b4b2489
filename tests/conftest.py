"""Shared pytest fixtures for the Vocalize test suite.

Provides mock LLM/STT providers, sample ratings, and a scripted
``PracticeBackend`` used by the controller and pipeline tests.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from vocalize.core.models import CategoryScoreInput, ScoreReport, Suggestion
from vocalize.services.audio.capture import CapturedClip
from vocalize.services.practice import PracticeBackend
from vocalize.services.scoring import compute_score_report

# ---------------------------------------------------------------------------
# Rating fixtures
# ---------------------------------------------------------------------------

SAMPLE_RATINGS = {
    "thesisClarity": 3,
    "organization": 4,
    "supportEvidence": 5,
    "pacingPausing": 2,
    "volumeClarity": 3,
    "vocalVariety": 4,
    "grammarSyntax": 5,
    "appropriateness": 2,
    "wordChoiceRhetoric": 3,
}


@pytest.fixture
def sample_ratings() -> dict:
    """Ratings 3,4,5,2,3,4,5,2,3 (totals 29/21/15, final 65.00)."""
    return dict(SAMPLE_RATINGS)


@pytest.fixture
def sample_report() -> ScoreReport:
    return compute_score_report(SAMPLE_RATINGS)


# ---------------------------------------------------------------------------
# LLM Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm():
    """Create a mock LLM provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseLLM interface whose default
        reply is a valid nine-score rating line.
    """
    from vocalize.services.llm.base import BaseLLM

    llm = AsyncMock(spec=BaseLLM)
    llm.generate.return_value = "3, 4, 5, 2, 3, 4, 5, 2, 3"
    return llm


# ---------------------------------------------------------------------------
# STT Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_stt():
    """Create a mock STT provider returning a fixed transcript."""
    from vocalize.services.transcription.base import BaseSTT

    stt = AsyncMock(spec=BaseSTT)
    stt.transcribe.return_value = "This is a test transcription."
    return stt


# ---------------------------------------------------------------------------
# Practice backend
# ---------------------------------------------------------------------------


class FakeBackend(PracticeBackend):
    """Scripted backend: fixed replies, optional failures and gates.

    Set ``*_error`` to make a stage raise. Clear ``transcribe_gate`` to hold
    transcription in flight until the test sets it.
    """

    def __init__(self) -> None:
        self.transcript = "Good morning, everyone."
        self.report = compute_score_report(SAMPLE_RATINGS)
        self.suggestions = [
            Suggestion(category="Content & Structure", text="Open with a clearer thesis."),
            Suggestion(category="Delivery & Vocal Control", text="Pause after key points."),
        ]
        self.transcribe_error: Exception | None = None
        self.score_error: Exception | None = None
        self.suggest_error: Exception | None = None
        self.transcribe_gate = asyncio.Event()
        self.transcribe_gate.set()
        self.transcribed: list[CapturedClip] = []
        self.scored: list[str] = []
        self.suggested: list[list[CategoryScoreInput]] = []

    async def transcribe(self, clip: CapturedClip) -> str:
        await self.transcribe_gate.wait()
        self.transcribed.append(clip)
        if self.transcribe_error:
            raise self.transcribe_error
        return self.transcript

    async def score(self, transcript: str) -> ScoreReport:
        self.scored.append(transcript)
        if self.score_error:
            raise self.score_error
        return self.report

    async def suggest(self, categories: list[CategoryScoreInput]) -> list[Suggestion]:
        self.suggested.append(categories)
        if self.suggest_error:
            raise self.suggest_error
        return self.suggestions


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()
