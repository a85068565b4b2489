"""
``PracticeBackend`` that calls the Vocalize HTTP API.

The recording controller is async while ``APIClient`` is synchronous, so
each call runs in a worker thread.
"""

import asyncio

from vocalize.core.models import CategoryScoreInput, ScoreReport, Suggestion
from vocalize.core.utils import encode_data_url
from vocalize.services.audio.capture import CapturedClip
from vocalize.services.practice import PracticeBackend
from vocalize.ui.api_client import APIClient


class HttpBackend(PracticeBackend):
    """Transcribe, score and suggest through ``/api/*`` endpoints."""

    def __init__(self, client: APIClient) -> None:
        self._client = client

    async def transcribe(self, clip: CapturedClip) -> str:
        data_url = encode_data_url(clip.data, clip.mime_type)
        return await asyncio.to_thread(self._client.transcribe, data_url)

    async def score(self, transcript: str) -> ScoreReport:
        body = await asyncio.to_thread(self._client.ai_score, transcript)
        return ScoreReport.model_validate(body)

    async def suggest(self, categories: list[CategoryScoreInput]) -> list[Suggestion]:
        payload = [item.model_dump() for item in categories]
        items = await asyncio.to_thread(self._client.generate_suggestions, payload)
        return [Suggestion.model_validate(item) for item in items]
