"""End-to-end practice flow: capture -> transcribe -> score -> suggest.

Runs the recording controller against the in-process services with mocked
LLM/STT providers and checks what lands in the version history.
"""

import json

from vocalize.services.audio import BufferedCapture
from vocalize.services.practice import ServiceBackend
from vocalize.services.recorder import RecordingController
from vocalize.services.scoring import AIRater
from vocalize.services.suggestions import SuggestionGenerator

SUGGESTIONS = json.dumps(
    [
        {"category": "Content & Structure", "text": "Lead with your main claim."},
        {"category": "Delivery & Vocal Control", "text": "Pause before transitions."},
        {"category": "Language Use & Style", "text": "Replace filler words."},
    ]
)


def _controller(mock_llm, mock_stt) -> RecordingController:
    backend = ServiceBackend(mock_stt, AIRater(mock_llm), SuggestionGenerator(mock_llm))
    return RecordingController(backend, time_limit=0)


async def test_full_attempt(mock_llm, mock_stt):
    """One recording produces a scored attempt with suggestions."""
    mock_llm.generate.side_effect = ["3,4,5,2,3,4,5,2,3", SUGGESTIONS]
    controller = _controller(mock_llm, mock_stt)

    await controller.record_clip(BufferedCapture(b"clip", "audio/webm;codecs=opus"))
    await controller.wait_for_pipelines()

    attempt = controller.history.latest
    assert attempt.version == 1
    assert attempt.transcript == "This is a test transcription."
    assert attempt.report.final_score == 65.0
    assert len(attempt.suggestions) == 3
    assert controller.clip_store.data_url(attempt.audio_key).startswith("data:audio/webm")

    suggestion_prompt = mock_llm.generate.call_args_list[1].args[0]
    assert "Content & Structure: 7.25/10" in suggestion_prompt


async def test_bad_model_output_leaves_attempt_unscored(mock_llm, mock_stt):
    """A malformed rating reply is recorded on the attempt, nothing else."""
    mock_llm.generate.return_value = "about a four"
    controller = _controller(mock_llm, mock_stt)

    await controller.record_clip(BufferedCapture(b"clip"))
    await controller.wait_for_pipelines()

    attempt = controller.history.latest
    assert attempt.report is None
    assert attempt.suggestions is None
    assert "Scoring failed" in attempt.error
    assert mock_llm.generate.await_count == 1


async def test_attempts_accumulate(mock_llm, mock_stt):
    """Each recording appends a new version; earlier ones are untouched."""
    mock_llm.generate.side_effect = [
        "3,4,5,2,3,4,5,2,3",
        "[]",
        "5,5,5,5,5,5,5,5,5",
        "[]",
    ]
    controller = _controller(mock_llm, mock_stt)

    for _ in range(2):
        await controller.record_clip(BufferedCapture(b"clip"))
        await controller.wait_for_pipelines()

    scores = [attempt.report.final_score for attempt in controller.history]
    assert scores == [65.0, 100.0]
    assert controller.history.is_expanded(1) and not controller.history.is_expanded(0)
