"""Tests for the rubric scoring engine."""

import pytest

from vocalize.core.exceptions import ValidationError
from vocalize.core.models import RubricCategory, RubricRatings
from vocalize.services.scoring import compute_score_report
from vocalize.services.scoring.engine import WEIGHTS

FIELDS = [
    "thesisClarity",
    "organization",
    "supportEvidence",
    "pacingPausing",
    "volumeClarity",
    "vocalVariety",
    "grammarSyntax",
    "appropriateness",
    "wordChoiceRhetoric",
]


def _uniform(value) -> dict:
    return {name: value for name in FIELDS}


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


class TestComputeScoreReport:
    def test_all_fives_is_perfect(self):
        report = compute_score_report(_uniform(5))

        assert report.content_and_structure.total == 40
        assert report.delivery_and_vocal_control.total == 40
        assert report.language_use_and_style.total == 20
        assert report.final_score == 100.0

    def test_all_ones(self):
        report = compute_score_report(_uniform(1))

        assert report.content_and_structure.total == 8
        assert report.delivery_and_vocal_control.total == 8
        assert report.language_use_and_style.total == 4
        assert report.final_score == 20.0

    def test_worked_example(self, sample_ratings):
        report = compute_score_report(sample_ratings)

        content = report.content_and_structure
        assert (content.thesis_clarity, content.organization, content.support_evidence) == (12, 12, 5)
        assert content.total == 29
        assert report.delivery_and_vocal_control.total == 21
        assert report.language_use_and_style.total == 15
        assert report.final_score == 65.0

    def test_final_score_is_sum_of_totals(self):
        # 40/40/20 maxima with 40/40/20 shares make each point worth 1%
        ratings = _uniform(1) | {"thesisClarity": 2, "organization": 2}
        report = compute_score_report(ratings)

        assert report.content_and_structure.total == 15
        assert report.final_score == 15 + 8 + 4

    def test_accepts_snake_case_and_model(self, sample_ratings):
        model = RubricRatings.from_mapping(sample_ratings)
        snake = model.model_dump()

        assert compute_score_report(model) == compute_score_report(snake)

    def test_pure_and_deterministic(self, sample_ratings):
        first = compute_score_report(sample_ratings).model_dump_json(by_alias=True)
        second = compute_score_report(sample_ratings).model_dump_json(by_alias=True)

        assert first == second

    def test_final_score_within_bounds(self):
        for value in range(1, 6):
            report = compute_score_report(_uniform(value))
            assert 0 <= report.final_score <= 100

    def test_weights_cover_every_field_once(self):
        assert [field for _, field, _ in WEIGHTS] == list(RubricRatings.model_fields)

    def test_integral_float_accepted(self):
        report = compute_score_report(_uniform(4.0))
        assert report.content_and_structure.total == 32


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestScoreReportSerialization:
    def test_camel_case_wire_format(self, sample_report):
        data = sample_report.model_dump(by_alias=True)

        assert data["finalScore"] == 65.0
        assert data["contentAndStructure"] == {
            "thesisClarity": 12,
            "organization": 12,
            "supportEvidence": 5,
            "total": 29,
        }
        assert data["languageUseAndStyle"]["wordChoiceRhetoric"] == 3

    def test_normalized_scores(self, sample_report):
        normalized = sample_report.normalized_scores()

        assert normalized[RubricCategory.content_and_structure] == 7.25
        assert normalized[RubricCategory.delivery_and_vocal_control] == 5.25
        assert normalized[RubricCategory.language_use_and_style] == 7.5


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize("bad", [0, 6, -1, 2.5, "3", True, None])
    def test_bad_value_names_field(self, sample_ratings, bad):
        sample_ratings["vocalVariety"] = bad

        with pytest.raises(ValidationError) as exc_info:
            compute_score_report(sample_ratings)

        assert exc_info.value.field == "vocalVariety"
        assert exc_info.value.status_code == 400
        assert "vocalVariety" in exc_info.value.detail

    def test_missing_field(self, sample_ratings):
        del sample_ratings["grammarSyntax"]

        with pytest.raises(ValidationError) as exc_info:
            compute_score_report(sample_ratings)

        assert exc_info.value.field == "grammarSyntax"

    def test_first_bad_field_reported(self):
        ratings = _uniform(3) | {"organization": 0, "appropriateness": 9}

        with pytest.raises(ValidationError) as exc_info:
            compute_score_report(ratings)

        assert exc_info.value.field == "organization"

    def test_unvalidated_model_is_rechecked(self):
        values = {name: 3 for name in RubricRatings.model_fields} | {"pacing_pausing": 7}
        ratings = RubricRatings.model_construct(**values)

        with pytest.raises(ValidationError) as exc_info:
            compute_score_report(ratings)

        assert exc_info.value.field == "pacingPausing"

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            compute_score_report([3] * 9)

        assert exc_info.value.field == "body"
