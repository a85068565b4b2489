"""
Abstract base class for Speech-to-Text providers.

All STT implementations (Google Cloud Speech, local Whisper) must implement
this interface, enabling provider-agnostic transcription in the service layer.
"""

from abc import ABC, abstractmethod
from enum import StrEnum

# Returned when recognition succeeds but yields no usable segments
NO_TRANSCRIPTION = "No transcription available"


class AudioEncoding(StrEnum):
    """Audio container/codec of a captured clip."""

    WEBM_OPUS = "WEBM_OPUS"
    OGG_OPUS = "OGG_OPUS"
    LINEAR16 = "LINEAR16"
    FLAC = "FLAC"

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "AudioEncoding | None":
        """Guess the encoding from a MIME type such as ``audio/webm``.

        Returns None for empty or unrecognized types.
        """
        if not mime_type:
            return None
        return _MIME_ENCODINGS.get(mime_type.split(";", 1)[0].strip().lower())


_MIME_ENCODINGS = {
    "audio/webm": AudioEncoding.WEBM_OPUS,
    "video/webm": AudioEncoding.WEBM_OPUS,
    "audio/ogg": AudioEncoding.OGG_OPUS,
    "audio/wav": AudioEncoding.LINEAR16,
    "audio/x-wav": AudioEncoding.LINEAR16,
    "audio/wave": AudioEncoding.LINEAR16,
    "audio/flac": AudioEncoding.FLAC,
}


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, encoding: AudioEncoding | None = None) -> str:
        """Transcribe one recorded clip to text.

        Args:
            audio: The encoded clip bytes.
            encoding: Encoding hint; providers fall back to their configured
                default when None.

        Returns:
            The transcript, or ``NO_TRANSCRIPTION`` if nothing was recognized.

        Raises:
            TranscriptionError: If the provider fails (network, auth, decode).
        """
