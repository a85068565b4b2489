"""Score-and-suggest pipeline for one practice attempt.

``PracticeBackend`` is the seam between the recording controller and the
rest of the system: ``ServiceBackend`` calls the services in-process, while
the UI uses an HTTP implementation that talks to the API.

``PracticePipeline.run`` scores a transcript, stores the report, then asks
for suggestions on the 0-10 category scale. Each stage catches and records
its own failure so one bad attempt never affects another.
"""

import logging
from abc import ABC, abstractmethod

from vocalize.core.config import get_settings
from vocalize.core.models import CategoryScoreInput, ScoreReport, Suggestion
from vocalize.services.audio.capture import CapturedClip
from vocalize.services.history import VersionHistory
from vocalize.services.llm import create_llm
from vocalize.services.scoring.ai_rater import AIRater
from vocalize.services.suggestions import SuggestionGenerator, category_inputs_from_report
from vocalize.services.transcription import (
    NO_TRANSCRIPTION,
    AudioEncoding,
    BaseSTT,
    create_stt,
)

logger = logging.getLogger(__name__)

# Transcript stored when the transcription call itself fails
TRANSCRIPTION_FAILED = "Transcription failed"


def is_scorable(transcript: str | None) -> bool:
    """Whether a transcript carries speech worth sending to the rater."""
    if not transcript or not transcript.strip():
        return False
    return transcript not in (NO_TRANSCRIPTION, TRANSCRIPTION_FAILED)


class PracticeBackend(ABC):
    """Transcription, scoring and suggestion calls used by the controller."""

    @abstractmethod
    async def transcribe(self, clip: CapturedClip) -> str:
        """Return the transcript of ``clip`` (sentinel if nothing recognized)."""

    @abstractmethod
    async def score(self, transcript: str) -> ScoreReport:
        """Rate ``transcript`` with the LLM and compute its score report."""

    @abstractmethod
    async def suggest(self, categories: list[CategoryScoreInput]) -> list[Suggestion]:
        """Return up to five suggestions for the given category scores."""


class ServiceBackend(PracticeBackend):
    """Backend that calls the STT / LLM services directly."""

    def __init__(
        self,
        stt: BaseSTT,
        rater: AIRater,
        suggester: SuggestionGenerator,
    ) -> None:
        self._stt = stt
        self._rater = rater
        self._suggester = suggester

    @classmethod
    def from_settings(cls) -> "ServiceBackend":
        """Build the providers selected in settings."""
        settings = get_settings()
        llm = create_llm(provider=settings.llm_provider)
        return cls(
            stt=create_stt(provider=settings.stt_provider),
            rater=AIRater(llm),
            suggester=SuggestionGenerator(llm),
        )

    async def transcribe(self, clip: CapturedClip) -> str:
        return await self._stt.transcribe(clip.data, AudioEncoding.from_mime_type(clip.mime_type))

    async def score(self, transcript: str) -> ScoreReport:
        return await self._rater.score(transcript)

    async def suggest(self, categories: list[CategoryScoreInput]) -> list[Suggestion]:
        return await self._suggester.request_suggestions(categories)


class PracticePipeline:
    """Runs scoring and suggestions for one attempt and fills the history."""

    def __init__(self, backend: PracticeBackend, history: VersionHistory) -> None:
        self._backend = backend
        self._history = history

    async def run(self, index: int, transcript: str | None) -> None:
        """Score attempt ``index`` and request its suggestions.

        Never raises; stage failures are logged and noted on the attempt.
        """
        if not is_scorable(transcript):
            logger.info("Attempt %d has no usable transcript; skipping scoring", index + 1)
            return

        try:
            report = await self._backend.score(transcript)
        except Exception as exc:
            logger.warning("Scoring failed for attempt %d: %s", index + 1, exc)
            self._history.record_error(index, f"Scoring failed: {exc}")
            return
        self._history.fill_score(index, report)

        try:
            suggestions = await self._backend.suggest(category_inputs_from_report(report))
        except Exception as exc:
            logger.warning("Suggestions failed for attempt %d: %s", index + 1, exc)
            self._history.record_error(index, f"Suggestions failed: {exc}")
            return
        self._history.fill_suggestions(index, suggestions)
