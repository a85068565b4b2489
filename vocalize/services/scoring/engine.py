"""
Rubric scoring engine.

Maps nine 1-5 ratings to a weighted ``ScoreReport``. The weighting table is
fixed: Content & Structure and Delivery & Vocal Control each max out at 40,
Language Use & Style at 20, and the final score blends them 40/40/20.

Arithmetic is exact (``Fraction``) and the final score is rounded half away
from zero to two decimals, so identical ratings always produce identical
reports.
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from typing import Any

from vocalize.core.models import (
    ContentAndStructureScore,
    DeliveryAndVocalControlScore,
    LanguageUseAndStyleScore,
    RubricCategory,
    RubricRatings,
    ScoreReport,
    validate_rating,
)

# (category, rating field, multiplier) in rubric order
WEIGHTS: tuple[tuple[RubricCategory, str, int], ...] = (
    (RubricCategory.content_and_structure, "thesis_clarity", 4),
    (RubricCategory.content_and_structure, "organization", 3),
    (RubricCategory.content_and_structure, "support_evidence", 1),
    (RubricCategory.delivery_and_vocal_control, "pacing_pausing", 4),
    (RubricCategory.delivery_and_vocal_control, "volume_clarity", 3),
    (RubricCategory.delivery_and_vocal_control, "vocal_variety", 1),
    (RubricCategory.language_use_and_style, "grammar_syntax", 2),
    (RubricCategory.language_use_and_style, "appropriateness", 1),
    (RubricCategory.language_use_and_style, "word_choice_rhetoric", 1),
)

# Share of the final score contributed by each category
CATEGORY_SHARES: dict[RubricCategory, Fraction] = {
    RubricCategory.content_and_structure: Fraction(2, 5),
    RubricCategory.delivery_and_vocal_control: Fraction(2, 5),
    RubricCategory.language_use_and_style: Fraction(1, 5),
}

_CATEGORY_MODELS = {
    RubricCategory.content_and_structure: ContentAndStructureScore,
    RubricCategory.delivery_and_vocal_control: DeliveryAndVocalControlScore,
    RubricCategory.language_use_and_style: LanguageUseAndStyleScore,
}

_TWO_PLACES = Decimal("0.01")


def _round_score(value: Fraction) -> float:
    """Round to 2 decimals, half away from zero."""
    exact = Decimal(value.numerator) / Decimal(value.denominator)
    return float(exact.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _checked_values(ratings: RubricRatings | Mapping[str, Any]) -> dict[str, int]:
    if not isinstance(ratings, RubricRatings):
        ratings = RubricRatings.from_mapping(ratings)
    fields = RubricRatings.model_fields
    # Re-check instances built without validation (model_construct)
    return {
        name: validate_rating(fields[name].alias or name, getattr(ratings, name, None))
        for name in fields
    }


def compute_score_report(ratings: RubricRatings | Mapping[str, Any]) -> ScoreReport:
    """Compute the weighted score report for one set of ratings.

    Args:
        ratings: A ``RubricRatings`` instance, or a camelCase / snake_case
            mapping of the nine ratings.

    Returns:
        The immutable ``ScoreReport``.

    Raises:
        ValidationError: If any rating is missing, non-integer or outside
            [1, 5]. No partial report is produced.
    """
    values = _checked_values(ratings)

    weighted: dict[RubricCategory, dict[str, int]] = {member: {} for member in RubricCategory}
    for category, field, multiplier in WEIGHTS:
        weighted[category][field] = values[field] * multiplier

    groups = {
        category: _CATEGORY_MODELS[category](**sub_scores)
        for category, sub_scores in weighted.items()
    }

    blended = sum(
        Fraction(groups[category].total, category.max_total) * share
        for category, share in CATEGORY_SHARES.items()
    )

    return ScoreReport(
        content_and_structure=groups[RubricCategory.content_and_structure],
        delivery_and_vocal_control=groups[RubricCategory.delivery_and_vocal_control],
        language_use_and_style=groups[RubricCategory.language_use_and_style],
        final_score=_round_score(blended * 100),
    )
