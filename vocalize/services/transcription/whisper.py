"""Whisper STT implementation using faster-whisper.

Transcribes a recorded clip held in memory. faster-whisper decodes the
container itself (WebM/Opus, WAV, ...), so the encoding hint is not needed.
The WhisperModel is loaded lazily and cached at module level to avoid
repeated initialization overhead.
"""

import asyncio
import io
import logging

from faster_whisper import WhisperModel

from vocalize.core.config import get_settings
from vocalize.core.exceptions import TranscriptionError
from vocalize.services.transcription.base import NO_TRANSCRIPTION, AudioEncoding, BaseSTT

logger = logging.getLogger(__name__)

_model_cache: WhisperModel | None = None


class WhisperSTT(BaseSTT):
    """Speech-to-text provider using faster-whisper (CTranslate2).

    Args:
        model_size: Whisper model size (tiny, base, small, medium, large-v3).
        device: Computation device ("cpu" or "cuda").
        compute_type: CTranslate2 compute type ("int8", "float16", etc.).
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        model_size: str | None = None,
        device: str = "cpu",
        compute_type: str = "int8",
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model_size = model_size or self._settings.whisper_model
        self._device = device
        self._compute_type = compute_type
        # Whisper wants ISO 639-1 ("en"), settings carry BCP-47 ("en-US")
        self._language = self._settings.speech_language_code.split("-", 1)[0] or None

    def _get_model(self) -> WhisperModel:
        """Return the cached WhisperModel, loading it on first use."""
        global _model_cache  # noqa: PLW0603
        if _model_cache is None:
            logger.info(
                "Loading Whisper model: %s (device=%s, compute=%s)",
                self._model_size,
                self._device,
                self._compute_type,
            )
            _model_cache = WhisperModel(
                self._model_size,
                device=self._device,
                compute_type=self._compute_type,
            )
        return _model_cache

    def _run_transcription(self, audio: bytes, beam_size: int = 5) -> list[str]:
        """Run synchronous transcription (CPU-bound).

        Must be called via asyncio.to_thread(). The segment iterator is
        materialized inside this function to avoid CTranslate2
        thread-safety issues.
        """
        model = self._get_model()
        segments_iter, _info = model.transcribe(
            io.BytesIO(audio),
            language=self._language,
            beam_size=beam_size,
            vad_filter=True,
        )
        return [seg.text.strip() for seg in segments_iter if seg.text.strip()]

    async def transcribe(self, audio: bytes, encoding: AudioEncoding | None = None) -> str:
        """Transcribe a clip with the local Whisper model."""
        try:
            lines = await asyncio.to_thread(self._run_transcription, audio)
        except Exception as exc:
            raise TranscriptionError(detail=f"Whisper transcription failed: {exc}") from exc

        if not lines:
            return NO_TRANSCRIPTION
        return " ".join(lines)
