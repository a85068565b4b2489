"""Tests for rubric models and shared helpers."""

import pytest

from vocalize.core.exceptions import ValidationError
from vocalize.core.models import RubricCategory, RubricRatings, Suggestion, SuggestionsResponse
from vocalize.core.utils import decode_data_url, encode_data_url, strip_code_fences
from vocalize.services.transcription import AudioEncoding

# ---------------------------------------------------------------------------
# RubricCategory
# ---------------------------------------------------------------------------


class TestRubricCategory:
    def test_labels_and_maxima(self):
        assert [(c.label, c.max_total) for c in RubricCategory] == [
            ("Content & Structure", 40),
            ("Delivery & Vocal Control", 40),
            ("Language Use & Style", 20),
        ]

    @pytest.mark.parametrize(
        "value",
        ["Content & Structure", "content and structure", "CONTENT&STRUCTURE", "contentAndStructure"],
    )
    def test_from_label_variants(self, value):
        assert RubricCategory.from_label(value) is RubricCategory.content_and_structure

    def test_from_label_unknown(self):
        with pytest.raises(ValueError, match="Unknown rubric category"):
            RubricCategory.from_label("Body Language")


# ---------------------------------------------------------------------------
# RubricRatings / Suggestion
# ---------------------------------------------------------------------------


class TestRubricRatings:
    def test_from_camel_case(self, sample_ratings):
        ratings = RubricRatings.from_mapping(sample_ratings)

        assert ratings.thesis_clarity == 3
        assert ratings.model_dump(by_alias=True) == sample_ratings

    def test_missing_field_named(self, sample_ratings):
        sample_ratings.pop("thesisClarity")

        with pytest.raises(ValidationError, match="thesisClarity"):
            RubricRatings.from_mapping(sample_ratings)


class TestSuggestion:
    def test_label_resolved_and_serialized(self):
        suggestion = Suggestion(category="language use and style", text="Vary your verbs.")

        assert suggestion.category is RubricCategory.language_use_and_style
        assert suggestion.model_dump() == {
            "category": "Language Use & Style",
            "text": "Vary your verbs.",
        }

    def test_response_round_trips_through_json(self):
        response = SuggestionsResponse(
            suggestions=[Suggestion(category="Content & Structure", text="Tighten the intro.")]
        )

        parsed = SuggestionsResponse.model_validate_json(response.model_dump_json())

        assert parsed == response


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestDataUrl:
    def test_decode_with_codec_params(self):
        mime, data = decode_data_url("data:audio/webm;codecs=opus;base64,YWJj")

        assert mime == "audio/webm"
        assert data == b"abc"

    def test_decode_bare_base64(self):
        assert decode_data_url("YWJj") == ("", b"abc")

    def test_encode_inverse(self):
        assert decode_data_url(encode_data_url(b"\x00\x01", "audio/ogg")) == (
            "audio/ogg",
            b"\x00\x01",
        )

    @pytest.mark.parametrize("value", ["data:audio/webm;base64,!!!", "data:audio/webm;base64,", "not base64"])
    def test_invalid_payload(self, value):
        with pytest.raises(ValidationError) as exc_info:
            decode_data_url(value)

        assert exc_info.value.field == "audio"


class TestAudioEncoding:
    @pytest.mark.parametrize(
        ("mime", "expected"),
        [
            ("audio/webm", AudioEncoding.WEBM_OPUS),
            ("audio/webm;codecs=opus", AudioEncoding.WEBM_OPUS),
            ("audio/ogg", AudioEncoding.OGG_OPUS),
            ("audio/wav", AudioEncoding.LINEAR16),
            ("audio/x-wav", AudioEncoding.LINEAR16),
            ("audio/flac", AudioEncoding.FLAC),
            ("audio/aac", None),
            ("", None),
        ],
    )
    def test_from_mime_type(self, mime, expected):
        assert AudioEncoding.from_mime_type(mime) is expected


def test_strip_code_fences():
    assert strip_code_fences('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'
    assert strip_code_fences("  3,4,5  ") == "3,4,5"
