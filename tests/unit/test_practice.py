"""Tests for the in-process practice backend and transcript gating."""

from unittest.mock import patch

import pytest

from vocalize.core.models import CategoryScoreInput
from vocalize.services.audio import CapturedClip
from vocalize.services.practice import TRANSCRIPTION_FAILED, ServiceBackend, is_scorable
from vocalize.services.scoring import AIRater
from vocalize.services.suggestions import SuggestionGenerator
from vocalize.services.transcription import NO_TRANSCRIPTION, AudioEncoding


@pytest.mark.parametrize(
    ("transcript", "expected"),
    [
        ("Good morning.", True),
        (NO_TRANSCRIPTION, False),
        (TRANSCRIPTION_FAILED, False),
        ("   ", False),
        (None, False),
    ],
)
def test_is_scorable(transcript, expected):
    assert is_scorable(transcript) is expected


@pytest.fixture
def backend(mock_llm, mock_stt):
    return ServiceBackend(
        stt=mock_stt,
        rater=AIRater(mock_llm),
        suggester=SuggestionGenerator(mock_llm),
    )


class TestServiceBackend:
    async def test_transcribe_maps_mime_type(self, backend, mock_stt):
        result = await backend.transcribe(CapturedClip(b"abc", "audio/webm; codecs=opus"))

        assert result == "This is a test transcription."
        mock_stt.transcribe.assert_awaited_once_with(b"abc", AudioEncoding.WEBM_OPUS)

    async def test_score(self, backend):
        report = await backend.score("A short talk.")
        assert report.final_score == 65.0

    async def test_suggest(self, backend, mock_llm):
        mock_llm.generate.return_value = '[{"category": "Language Use & Style", "text": "Vary verbs."}]'

        suggestions = await backend.suggest([CategoryScoreInput(name="Language Use & Style", score=7.5)])

        assert [s.text for s in suggestions] == ["Vary verbs."]

    def test_from_settings_uses_configured_providers(self, mock_llm, mock_stt):
        with (
            patch("vocalize.services.practice.create_llm", return_value=mock_llm) as create_llm,
            patch("vocalize.services.practice.create_stt", return_value=mock_stt) as create_stt,
        ):
            backend = ServiceBackend.from_settings()

        assert isinstance(backend, ServiceBackend)
        create_llm.assert_called_once()
        create_stt.assert_called_once()
