"""Tests for the HTTP-backed practice backend used by the UI."""

from unittest.mock import MagicMock

import pytest

from vocalize.core.models import CategoryScoreInput, RubricCategory
from vocalize.services.audio import CapturedClip
from vocalize.ui.api_client import APIClient
from vocalize.ui.backend import HttpBackend


@pytest.fixture
def api():
    return MagicMock(spec=APIClient)


class TestHttpBackend:
    async def test_transcribe_sends_data_url(self, api):
        api.transcribe.return_value = "Hello"

        result = await HttpBackend(api).transcribe(CapturedClip(b"abc", "audio/ogg"))

        assert result == "Hello"
        api.transcribe.assert_called_once_with("data:audio/ogg;base64,YWJj")

    async def test_score_parses_report(self, api, sample_report):
        api.ai_score.return_value = sample_report.model_dump(by_alias=True)

        report = await HttpBackend(api).score("speech")

        assert report == sample_report

    async def test_suggest_parses_labels(self, api):
        api.generate_suggestions.return_value = [
            {"category": "Delivery & Vocal Control", "text": "Slow down."}
        ]

        suggestions = await HttpBackend(api).suggest(
            [CategoryScoreInput(name="Delivery & Vocal Control", score=5.25)]
        )

        assert suggestions[0].category is RubricCategory.delivery_and_vocal_control
        api.generate_suggestions.assert_called_once_with(
            [{"name": "Delivery & Vocal Control", "score": 5.25}]
        )
