"""Google Cloud Speech-to-Text implementation.

Sends a whole clip to the synchronous ``recognize`` RPC with a fixed
recognition config (encoding, sample rate and language from settings).
The async client is created lazily on first use.
"""

import logging

from google.cloud import speech
from google.oauth2 import service_account

from vocalize.core.config import get_settings
from vocalize.core.exceptions import TranscriptionError
from vocalize.services.transcription.base import NO_TRANSCRIPTION, AudioEncoding, BaseSTT

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Containers that do not carry a sample rate header the API can read
_RATE_REQUIRED = {AudioEncoding.WEBM_OPUS, AudioEncoding.OGG_OPUS}


class GoogleSpeechSTT(BaseSTT):
    """Speech-to-text provider backed by Google Cloud Speech (v1).

    Args:
        encoding: Default clip encoding (falls back to settings).
        sample_rate: Sample rate in Hz for Opus clips.
        language_code: BCP-47 language, e.g. "en-US".
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        encoding: AudioEncoding | str | None = None,
        sample_rate: int | None = None,
        language_code: str | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._encoding = AudioEncoding(encoding or self._settings.speech_encoding)
        self._sample_rate = sample_rate or self._settings.speech_sample_rate
        self._language_code = language_code or self._settings.speech_language_code
        self._client: speech.SpeechAsyncClient | None = None

    def _build_client(self) -> speech.SpeechAsyncClient:
        """Create the async client from service-account fields or an API key.

        Falls back to Application Default Credentials when neither is set.
        """
        settings = self._settings
        private_key = settings.google_private_key.get_secret_value()
        api_key = settings.google_api_key.get_secret_value()

        if settings.google_client_email and private_key:
            credentials = service_account.Credentials.from_service_account_info(
                {
                    "type": "service_account",
                    "project_id": settings.google_project_id,
                    "client_email": settings.google_client_email,
                    # .env files usually carry the PEM with escaped newlines
                    "private_key": private_key.replace("\\n", "\n"),
                    "token_uri": _TOKEN_URI,
                }
            )
            logger.info("Using service-account credentials for Google Speech")
            return speech.SpeechAsyncClient(credentials=credentials)
        if api_key:
            logger.info("Using API key for Google Speech")
            return speech.SpeechAsyncClient(client_options={"api_key": api_key})
        logger.info("Using application default credentials for Google Speech")
        return speech.SpeechAsyncClient()

    def _get_client(self) -> speech.SpeechAsyncClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def _recognition_config(self, encoding: AudioEncoding) -> speech.RecognitionConfig:
        config = speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding[encoding.value],
            language_code=self._language_code,
        )
        if encoding in _RATE_REQUIRED:
            config.sample_rate_hertz = self._sample_rate
        return config

    @staticmethod
    def _join_results(response) -> str:
        """Join the top alternative of every result segment with newlines."""
        lines = [
            result.alternatives[0].transcript
            for result in response.results
            if result.alternatives and result.alternatives[0].transcript
        ]
        return "\n".join(lines)

    async def transcribe(self, audio: bytes, encoding: AudioEncoding | None = None) -> str:
        """Transcribe a clip with Google Cloud Speech.

        Args:
            audio: Encoded clip bytes.
            encoding: Encoding hint; defaults to the configured encoding.

        Returns:
            Newline-joined transcript, or ``NO_TRANSCRIPTION`` when the
            service returns no segments.
        """
        encoding = encoding or self._encoding
        try:
            response = await self._get_client().recognize(
                config=self._recognition_config(encoding),
                audio=speech.RecognitionAudio(content=audio),
            )
        except Exception as exc:
            logger.error("Google Speech recognition failed: %s", exc)
            raise TranscriptionError(detail=f"Google Speech transcription failed: {exc}") from exc

        text = self._join_results(response)
        if not text:
            logger.info("Google Speech returned no segments (%d bytes)", len(audio))
            return NO_TRANSCRIPTION
        return text
